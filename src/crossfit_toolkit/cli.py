#!/usr/bin/env python3
"""
CrossFit Toolkit CLI.

Log personal records, track goals and check today's recovery.

Usage:
    crossfit-toolkit log fran 4:32 --variant Rx
    crossfit-toolkit bests row
    crossfit-toolkit history back-squat
    crossfit-toolkit goal add fran 3:59 --date 2025-06-01
    crossfit-toolkit goal list
    crossfit-toolkit checkin training --energy 3 --soreness 2 --sleep 7
    crossfit-toolkit checkin rest
    crossfit-toolkit recovery
    crossfit-toolkit settings --weight-unit lb
    crossfit-toolkit stats
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .catalog import CatalogService
from .config import Settings, get_settings
from .dates import epoch_ms_to_date
from .db.database import Database
from .db.models import Category, GoalStatus, ScoreType, Variant
from .exceptions import ToolkitError
from .models.bests import BestSummary
from .models.goals import TrendStatus
from .models.recovery import AlertLevel
from .results import format_result, format_seconds_to_time, get_reps_label
from .services import CheckInService, GoalService, PerformanceService, SettingsService

console = Console()


def get_level_color(level: AlertLevel) -> str:
    """Get rich color for a recovery alert level."""
    colors = {
        AlertLevel.NONE: "green",
        AlertLevel.INFO: "blue",
        AlertLevel.WARNING: "yellow",
        AlertLevel.CRITICAL: "red",
    }
    return colors.get(level, "white")


def get_trend_color(trend: TrendStatus) -> str:
    colors = {
        TrendStatus.AHEAD: "green",
        TrendStatus.ON_TRACK: "cyan",
        TrendStatus.BEHIND: "red",
        TrendStatus.NO_DATA: "dim",
    }
    return colors.get(trend, "white")


def _variant(value: Optional[str]) -> Optional[Variant]:
    return Variant(value) if value else None


def cmd_log(args, db: Database, settings: Settings):
    """Log a performance."""
    catalog = CatalogService(db)
    service = PerformanceService(db, catalog)
    outcome = service.log_performance(
        args.item,
        args.result,
        performed_on=args.date,
        variant=_variant(args.variant),
        reps=args.reps,
        distance=args.distance,
        calories=args.calories,
        notes=args.notes,
    )
    item = catalog.get_item(args.item)

    console.print()
    console.print(f"Logged [bold]{item.name}[/bold]: {outcome.log.display_result}")
    if outcome.is_new_pr:
        console.print("[green bold]New personal record![/green bold]")
    elif outcome.previous_best:
        console.print(f"[dim]Current best: {outcome.previous_best.display_result}[/dim]")
    for goal_id in outcome.achieved_goal_ids:
        console.print(f"[green]Goal achieved:[/green] {goal_id}")
    console.print()


def _render_bests(summary: BestSummary, score_type: ScoreType, unit: str):
    table = Table(box=box.ROUNDED)
    table.add_column("Bucket", style="cyan")
    table.add_column("Best", style="white")
    table.add_column("Date", style="dim")

    if summary.overall:
        table.add_row(
            "Overall",
            format_result(summary.overall.display_result, score_type, unit),
            epoch_ms_to_date(summary.overall.date).isoformat(),
        )
    for distance, log in summary.by_distance.items():
        table.add_row(f"{distance:g}m", log.display_result, epoch_ms_to_date(log.date).isoformat())
    for seconds, log in summary.by_calorie_time.items():
        table.add_row(
            f"{format_seconds_to_time(seconds)} (cal)",
            f"{log.calories:g} cal",
            epoch_ms_to_date(log.date).isoformat(),
        )
    console.print(table)


def cmd_bests(args, db: Database, settings: Settings):
    """Show personal records for an item."""
    catalog = CatalogService(db)
    item = catalog.get_item(args.item)
    summary = PerformanceService(db, catalog).get_bests(item.id, _variant(args.variant))
    unit = SettingsService(db, settings).get().weight_unit

    console.print()
    console.print(Panel(f"[bold]{item.name} - Personal Records[/bold]"))
    if not summary.has_data:
        console.print("No results logged yet.")
        console.print()
        return
    _render_bests(summary, item.score_type, unit)
    console.print()


def cmd_history(args, db: Database, settings: Settings):
    """Show an item's logs grouped by distance, reps or variant."""
    catalog = CatalogService(db)
    item = catalog.get_item(args.item)
    groups = PerformanceService(db, catalog).get_history(item.id)

    console.print()
    console.print(Panel(f"[bold]{item.name} - History[/bold]"))
    if not groups:
        console.print("No results logged yet.")
        console.print()
        return

    for group in groups:
        table = Table(title=group.label, box=box.SIMPLE)
        table.add_column("Date", style="dim")
        table.add_column("Result", style="white")
        table.add_column("Variant")
        table.add_column("Notes", style="dim")
        for log in group.logs:
            marker = " [green](PR)[/green]" if log.id == group.best.id else ""
            result = log.display_result
            if log.reps:
                result = f"{result} ({get_reps_label(log.reps)})"
            table.add_row(
                epoch_ms_to_date(log.date).isoformat(),
                result + marker,
                log.variant.value if log.variant else "",
                log.notes or "",
            )
        console.print(table)
    console.print()


def cmd_goal(args, db: Database, settings: Settings):
    """Add, list, cancel or achieve goals."""
    catalog = CatalogService(db)
    service = GoalService(db, catalog, settings)

    if args.goal_command == "add":
        target_value = service.parse_target(args.item, args.target)
        goal = service.create_goal(
            args.item,
            target_value,
            args.date,
            variant=_variant(args.variant),
            reps=args.reps,
        )
        console.print(f"[green]Goal created:[/green] {goal.id}")
        return

    if args.goal_command == "cancel":
        service.cancel_goal(args.goal_id)
        console.print(f"Goal {args.goal_id} cancelled.")
        return

    if args.goal_command == "achieve":
        service.achieve_goal(args.goal_id)
        console.print(f"[green]Goal {args.goal_id} marked achieved.[/green]")
        return

    status = GoalStatus(args.status)
    goals = service.list_goals(status)

    console.print()
    console.print(Panel(f"[bold]Goals - {status.value}[/bold]"))
    if not goals:
        console.print("No goals.")
        console.print()
        return

    table = Table(box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Item", style="cyan")
    table.add_column("Target")
    table.add_column("Current")
    table.add_column("Progress", justify="right")
    table.add_column("Days left", justify="right")
    table.add_column("Trend")

    for goal in goals:
        color = get_trend_color(goal.trend)
        trend = goal.trend.value.replace("_", " ")
        if goal.projected_date:
            trend = f"{trend} ({goal.projected_date})"
        name = goal.item_name
        if goal.reps:
            name = f"{name} {get_reps_label(goal.reps)}"
        table.add_row(
            goal.id[:8],
            name,
            goal.target_result,
            goal.current_result or "-",
            f"{goal.progress:.0f}%",
            str(goal.days_remaining),
            f"[{color}]{trend}[/{color}]",
        )
    console.print(table)
    console.print()


def cmd_checkin(args, db: Database, settings: Settings):
    """Record today's training or rest check-in."""
    service = CheckInService(db, settings)
    if args.checkin_type == "training":
        check_in = service.save_training(args.energy, args.soreness, args.sleep, on=args.date)
    else:
        check_in = service.save_rest(on=args.date)
    console.print(f"Saved {check_in.type.value} check-in for {check_in.date}.")


def cmd_recovery(args, db: Database, settings: Settings):
    """Show today's recovery score."""
    status = CheckInService(db, settings).get_recovery()
    color = get_level_color(status.score.level)

    console.print()
    if status.is_first_check_in:
        console.print("No check-ins yet. Start with: crossfit-toolkit checkin training")
        console.print()
    elif status.has_long_gap:
        console.print("[cyan]Welcome back![/cyan]")

    text = f"""
[cyan]Date:[/cyan]              {status.date}
[cyan]Consecutive days:[/cyan]  {status.consecutive_days}
[cyan]Level:[/cyan]             [{color}]{status.score.level.value.upper()}[/{color}]
"""
    if status.title:
        text += f"\n[bold {color}]{status.title}[/bold {color}]\n{status.description}\n"
    for reason in status.score.reasons:
        text += f"\n  - {reason.message}"

    console.print(Panel(text, title="Recovery", box=box.ROUNDED))
    console.print()


def cmd_settings(args, db: Database, settings: Settings):
    """Show or update user settings."""
    service = SettingsService(db, settings)
    if args.weight_unit or args.distance_unit or args.min_sleep is not None:
        current = service.update(args.weight_unit, args.distance_unit, args.min_sleep)
    else:
        current = service.get()

    table = Table(box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Weight unit", current.weight_unit)
    table.add_row("Distance unit", current.distance_unit)
    table.add_row("Minimum sleep", f"{current.min_sleep_hours:g}h")
    console.print(table)


def cmd_stats(args, db: Database, settings: Settings):
    """Show database statistics."""
    stats = db.get_stats()

    console.print()
    console.print(Panel("[bold]CrossFit Toolkit - Database Stats[/bold]"))
    console.print()

    table = Table(box=box.ROUNDED)
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Database", str(stats['db_path']))
    table.add_row("Logged results", str(stats['total_logs']))
    table.add_row("Items logged", str(stats['items_logged']))
    table.add_row("Active goals", str(stats['active_goals']))
    table.add_row("Achieved goals", str(stats['achieved_goals']))
    table.add_row("Check-ins", str(stats['check_ins']))
    table.add_row("Training days", str(stats['training_days']))

    console.print(table)
    console.print()


def cmd_items(args, db: Database, settings: Settings):
    """List or search catalog items."""
    catalog = CatalogService(db)
    if args.query:
        items = catalog.search(args.query)
    else:
        items = catalog.list_items(Category(args.category) if args.category else None)

    table = Table(box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Score")
    for item in items:
        table.add_row(item.id, item.name, item.category.value, item.score_type.value)
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crossfit-toolkit",
        description="CrossFit Toolkit - PRs, goals and recovery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crossfit-toolkit log fran 4:32 --variant Rx
  crossfit-toolkit log row 7:05 --distance 2000
  crossfit-toolkit log back-squat 140 --reps 3
  crossfit-toolkit goal add fran 3:59 --date 2025-06-01
  crossfit-toolkit checkin training --energy 3 --soreness 2 --sleep 7
  crossfit-toolkit recovery
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    variants = [v.value for v in Variant]

    # Log command
    log_p = subparsers.add_parser("log", help="Log a result")
    log_p.add_argument("item", help="Catalog item ID")
    log_p.add_argument("result", help="Result (e.g. '4:32', '100', '18+5')")
    log_p.add_argument("--date", help="Date performed (YYYY-MM-DD, default today)")
    log_p.add_argument("--variant", choices=variants, help="Variant")
    log_p.add_argument("--reps", type=int, help="Rep scheme for lifts")
    log_p.add_argument("--distance", type=float, help="Distance in metres")
    log_p.add_argument("--calories", type=float, help="Calories")
    log_p.add_argument("--notes", help="Notes")

    # Bests command
    bests_p = subparsers.add_parser("bests", help="Show personal records for an item")
    bests_p.add_argument("item", help="Catalog item ID")
    bests_p.add_argument("--variant", choices=variants, help="Only this variant")

    # History command
    history_p = subparsers.add_parser("history", help="Show grouped history for an item")
    history_p.add_argument("item", help="Catalog item ID")

    # Goal command
    goal_p = subparsers.add_parser("goal", help="Manage goals")
    goal_sub = goal_p.add_subparsers(dest="goal_command", required=True)

    goal_add = goal_sub.add_parser("add", help="Add a goal")
    goal_add.add_argument("item", help="Catalog item ID")
    goal_add.add_argument("target", help="Target result (e.g. '3:59', '150')")
    goal_add.add_argument("--date", required=True, help="Target date (YYYY-MM-DD)")
    goal_add.add_argument("--variant", choices=variants, help="Variant filter")
    goal_add.add_argument("--reps", type=int, help="Rep-max filter for lifts")

    goal_list = goal_sub.add_parser("list", help="List goals")
    goal_list.add_argument(
        "--status",
        choices=[s.value for s in GoalStatus],
        default=GoalStatus.ACTIVE.value,
        help="Goal status to list",
    )

    goal_cancel = goal_sub.add_parser("cancel", help="Cancel a goal")
    goal_cancel.add_argument("goal_id", help="Goal ID")

    goal_achieve = goal_sub.add_parser("achieve", help="Mark a goal achieved")
    goal_achieve.add_argument("goal_id", help="Goal ID")

    # Check-in command
    checkin_p = subparsers.add_parser("checkin", help="Record a daily check-in")
    checkin_sub = checkin_p.add_subparsers(dest="checkin_type", required=True)

    training_p = checkin_sub.add_parser("training", help="Training day")
    training_p.add_argument("--energy", type=int, required=True, help="Energy 1-5")
    training_p.add_argument("--soreness", type=int, required=True, help="Soreness 1-5")
    training_p.add_argument("--sleep", type=float, required=True, help="Hours slept (5-9)")
    training_p.add_argument("--date", help="Date (YYYY-MM-DD, default today)")

    rest_p = checkin_sub.add_parser("rest", help="Rest day")
    rest_p.add_argument("--date", help="Date (YYYY-MM-DD, default today)")

    # Recovery command
    subparsers.add_parser("recovery", help="Show today's recovery score")

    # Settings command
    settings_p = subparsers.add_parser("settings", help="Show or update settings")
    settings_p.add_argument("--weight-unit", choices=["kg", "lb"], help="Weight unit")
    settings_p.add_argument("--distance-unit", choices=["m", "ft"], help="Distance unit")
    settings_p.add_argument("--min-sleep", type=float, help="Minimum sleep hours")

    # Stats command
    subparsers.add_parser("stats", help="Show database statistics")

    # Items command
    items_p = subparsers.add_parser("items", help="List or search catalog items")
    items_p.add_argument("query", nargs="?", help="Name to search for")
    items_p.add_argument("--category", choices=[c.value for c in Category], help="Category")

    return parser


COMMANDS = {
    "log": cmd_log,
    "bests": cmd_bests,
    "history": cmd_history,
    "goal": cmd_goal,
    "checkin": cmd_checkin,
    "recovery": cmd_recovery,
    "settings": cmd_settings,
    "stats": cmd_stats,
    "items": cmd_items,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    db = Database(str(settings.db_path))
    try:
        handler(args, db, settings)
    except ToolkitError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
