"""SQLite database for logged performances, goals and check-ins."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import DataIntegrityError, DatabaseError, LogValidationError
from .models import (
    CatalogItem,
    CheckInType,
    DailyCheckIn,
    Goal,
    GoalStatus,
    LoggedPerformance,
    UserSettings,
)

logger = logging.getLogger(__name__)


class Database:
    """SQLite database manager for the toolkit's user data.

    The builtin catalog is not stored here; only custom items, favorites,
    logs, goals, check-ins and settings are.
    """

    def __init__(self, db_path: str = "toolkit.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.executescript("""
                -- Logged performances (append-only, deletable)
                CREATE TABLE IF NOT EXISTS pr_logs (
                    id TEXT PRIMARY KEY,
                    item_id TEXT NOT NULL,
                    result_value REAL NOT NULL,
                    display_result TEXT NOT NULL,
                    variant TEXT,
                    date INTEGER NOT NULL,
                    reps INTEGER,
                    distance REAL,
                    calories REAL,
                    notes TEXT,
                    created_at INTEGER NOT NULL
                );

                -- Goals
                CREATE TABLE IF NOT EXISTS goals (
                    id TEXT PRIMARY KEY,
                    item_id TEXT NOT NULL,
                    target_value REAL NOT NULL,
                    target_date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'active',
                    achieved_at TEXT,
                    variant TEXT,
                    reps INTEGER
                );

                -- Daily check-ins (one per date)
                CREATE TABLE IF NOT EXISTS daily_check_ins (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL UNIQUE,
                    type TEXT NOT NULL,
                    energy INTEGER,
                    soreness INTEGER,
                    sleep_hours REAL,
                    created_at INTEGER NOT NULL
                );

                -- User-created catalog items
                CREATE TABLE IF NOT EXISTS custom_items (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    score_type TEXT NOT NULL,
                    metric_kind TEXT NOT NULL DEFAULT 'none',
                    description TEXT,
                    created_at INTEGER NOT NULL
                );

                CREATE TABLE IF NOT EXISTS favorites (
                    id TEXT PRIMARY KEY
                );

                -- Single-row settings
                CREATE TABLE IF NOT EXISTS settings (
                    id TEXT PRIMARY KEY,
                    weight_unit TEXT NOT NULL DEFAULT 'kg',
                    distance_unit TEXT NOT NULL DEFAULT 'm',
                    min_sleep_hours REAL NOT NULL DEFAULT 7
                );

                -- Indexes for common queries
                CREATE INDEX IF NOT EXISTS idx_pr_logs_item_date ON pr_logs(item_id, date);
                CREATE INDEX IF NOT EXISTS idx_pr_logs_date ON pr_logs(date DESC);
                CREATE INDEX IF NOT EXISTS idx_goals_status ON goals(status);
                CREATE INDEX IF NOT EXISTS idx_check_ins_date ON daily_check_ins(date DESC);
            """)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise DatabaseError(f"Could not open database: {e}", operation="connect") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise DataIntegrityError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise DatabaseError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # =========================================================================
    # Logged performances
    # =========================================================================

    def add_log(
        self,
        log: LoggedPerformance,
        achieved_goals: Sequence[Goal] = (),
    ) -> LoggedPerformance:
        """Insert a new logged performance.

        A log carries a distance or a calorie count, never both. Goals the
        log achieves are written in the same transaction as the insert.
        """
        if log.distance is not None and log.calories is not None:
            raise LogValidationError(
                "A log cannot carry both distance and calories",
                field="calories",
            )
        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO pr_logs
                (id, item_id, result_value, display_result, variant, date,
                 reps, distance, calories, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                log.id,
                log.item_id,
                log.result_value,
                log.display_result,
                log.variant.value if log.variant else None,
                log.date,
                log.reps,
                log.distance,
                log.calories,
                log.notes,
                log.created_at,
            ))
            for goal in achieved_goals:
                self._write_goal(conn, goal)
        logger.debug(f"Added log {log.id} for item {log.item_id}")
        return log

    def get_log(self, log_id: str) -> Optional[LoggedPerformance]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM pr_logs WHERE id = ?", (log_id,)
            ).fetchone()
            return LoggedPerformance.from_row(dict(row)) if row else None

    def get_logs_for_item(self, item_id: str) -> List[LoggedPerformance]:
        """Get all logs for an item, oldest first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM pr_logs
                WHERE item_id = ?
                ORDER BY date ASC, created_at ASC
            """, (item_id,)).fetchall()
        return [LoggedPerformance.from_row(dict(row)) for row in rows]

    def get_recent_logs(self, limit: int = 10) -> List[LoggedPerformance]:
        """Get the most recent logs across all items, newest first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM pr_logs
                ORDER BY date DESC, created_at DESC
                LIMIT ?
            """, (limit,)).fetchall()
        return [LoggedPerformance.from_row(dict(row)) for row in rows]

    def delete_log(self, log_id: str) -> bool:
        """Delete a log. Returns False if it did not exist."""
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM pr_logs WHERE id = ?", (log_id,))
            return cursor.rowcount > 0

    # =========================================================================
    # Goals
    # =========================================================================

    def add_goal(self, goal: Goal) -> Goal:
        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO goals
                (id, item_id, target_value, target_date, created_at, status,
                 achieved_at, variant, reps)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                goal.id,
                goal.item_id,
                goal.target_value,
                goal.target_date,
                goal.created_at,
                goal.status.value,
                goal.achieved_at,
                goal.variant.value if goal.variant else None,
                goal.reps,
            ))
        return goal

    @staticmethod
    def _write_goal(conn: sqlite3.Connection, goal: Goal) -> None:
        conn.execute("""
            UPDATE goals
            SET target_value = ?, target_date = ?, status = ?,
                achieved_at = ?, variant = ?, reps = ?
            WHERE id = ?
        """, (
            goal.target_value,
            goal.target_date,
            goal.status.value,
            goal.achieved_at,
            goal.variant.value if goal.variant else None,
            goal.reps,
            goal.id,
        ))

    def update_goal(self, goal: Goal) -> Goal:
        """Write back every mutable field of a goal."""
        with self._get_connection() as conn:
            self._write_goal(conn, goal)
        return goal

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM goals WHERE id = ?", (goal_id,)
            ).fetchone()
            return Goal.from_row(dict(row)) if row else None

    def get_all_goals(self) -> List[Goal]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM goals ORDER BY created_at ASC"
            ).fetchall()
        return [Goal.from_row(dict(row)) for row in rows]

    def get_goals_by_status(self, status: GoalStatus) -> List[Goal]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM goals WHERE status = ? ORDER BY created_at ASC",
                (status.value,),
            ).fetchall()
        return [Goal.from_row(dict(row)) for row in rows]

    def get_active_goals(self) -> List[Goal]:
        return self.get_goals_by_status(GoalStatus.ACTIVE)

    def delete_goal(self, goal_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
            return cursor.rowcount > 0

    # =========================================================================
    # Daily check-ins
    # =========================================================================

    def upsert_check_in(self, check_in: DailyCheckIn) -> DailyCheckIn:
        """Save a check-in, replacing any existing check-in for the same date.

        The existing record keeps its id and created_at.
        """
        with self._get_connection() as conn:
            existing = conn.execute(
                "SELECT id, created_at FROM daily_check_ins WHERE date = ?",
                (check_in.date,),
            ).fetchone()

            if existing:
                check_in.id = existing["id"]
                check_in.created_at = existing["created_at"]
                conn.execute("""
                    UPDATE daily_check_ins
                    SET type = ?, energy = ?, soreness = ?, sleep_hours = ?
                    WHERE id = ?
                """, (
                    check_in.type.value,
                    check_in.energy,
                    check_in.soreness,
                    check_in.sleep_hours,
                    check_in.id,
                ))
            else:
                conn.execute("""
                    INSERT INTO daily_check_ins
                    (id, date, type, energy, soreness, sleep_hours, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    check_in.id,
                    check_in.date,
                    check_in.type.value,
                    check_in.energy,
                    check_in.soreness,
                    check_in.sleep_hours,
                    check_in.created_at,
                ))
        return check_in

    def get_check_in_by_date(self, date_str: str) -> Optional[DailyCheckIn]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM daily_check_ins WHERE date = ?", (date_str,)
            ).fetchone()
            return DailyCheckIn.from_row(dict(row)) if row else None

    def get_check_in(self, check_in_id: str) -> Optional[DailyCheckIn]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM daily_check_ins WHERE id = ?", (check_in_id,)
            ).fetchone()
            return DailyCheckIn.from_row(dict(row)) if row else None

    def get_recent_check_ins(self, limit: int = 7) -> List[DailyCheckIn]:
        """Get the most recent check-ins, newest date first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM daily_check_ins
                ORDER BY date DESC
                LIMIT ?
            """, (limit,)).fetchall()
        return [DailyCheckIn.from_row(dict(row)) for row in rows]

    def get_latest_check_in(self) -> Optional[DailyCheckIn]:
        recent = self.get_recent_check_ins(limit=1)
        return recent[0] if recent else None

    def count_check_ins(self) -> int:
        with self._get_connection() as conn:
            return conn.execute(
                "SELECT COUNT(*) AS cnt FROM daily_check_ins"
            ).fetchone()["cnt"]

    def delete_check_in(self, check_in_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM daily_check_ins WHERE id = ?", (check_in_id,)
            )
            return cursor.rowcount > 0

    # =========================================================================
    # Custom catalog items and favorites
    # =========================================================================

    def add_custom_item(self, item: CatalogItem) -> CatalogItem:
        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO custom_items
                (id, name, category, score_type, metric_kind, description, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                item.id,
                item.name,
                item.category.value,
                item.score_type.value,
                item.metric_kind.value,
                item.description,
                item.created_at,
            ))
        return item

    def get_custom_item(self, item_id: str) -> Optional[CatalogItem]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM custom_items WHERE id = ?", (item_id,)
            ).fetchone()
            if not row:
                return None
            data = dict(row)
            data["is_builtin"] = False
            return CatalogItem.from_row(data)

    def get_custom_items(self) -> List[CatalogItem]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM custom_items ORDER BY name ASC"
            ).fetchall()
        items = []
        for row in rows:
            data = dict(row)
            data["is_builtin"] = False
            items.append(CatalogItem.from_row(data))
        return items

    def delete_custom_item(self, item_id: str) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM custom_items WHERE id = ?", (item_id,))
            conn.execute("DELETE FROM favorites WHERE id = ?", (item_id,))
            return cursor.rowcount > 0

    def get_favorite_ids(self) -> set:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT id FROM favorites").fetchall()
        return {row["id"] for row in rows}

    def toggle_favorite(self, item_id: str) -> bool:
        """Toggle an item's favorite flag. Returns the new state."""
        with self._get_connection() as conn:
            existing = conn.execute(
                "SELECT id FROM favorites WHERE id = ?", (item_id,)
            ).fetchone()
            if existing:
                conn.execute("DELETE FROM favorites WHERE id = ?", (item_id,))
                return False
            conn.execute("INSERT INTO favorites (id) VALUES (?)", (item_id,))
            return True

    # =========================================================================
    # Settings
    # =========================================================================

    def get_settings(
        self,
        default_min_sleep_hours: float = 7,
        default_weight_unit: str = "kg",
        default_distance_unit: str = "m",
    ) -> UserSettings:
        """Get user settings, falling back to defaults if none were saved."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM settings WHERE id = 'default'"
            ).fetchone()
        if not row:
            return UserSettings(
                weight_unit=default_weight_unit,
                distance_unit=default_distance_unit,
                min_sleep_hours=default_min_sleep_hours,
            )
        return UserSettings(
            weight_unit=row["weight_unit"],
            distance_unit=row["distance_unit"],
            min_sleep_hours=row["min_sleep_hours"],
        )

    def save_settings(self, settings: UserSettings) -> UserSettings:
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO settings
                (id, weight_unit, distance_unit, min_sleep_hours)
                VALUES ('default', ?, ?, ?)
            """, (
                settings.weight_unit,
                settings.distance_unit,
                settings.min_sleep_hours,
            ))
        return settings

    # =========================================================================
    # Stats
    # =========================================================================

    def get_stats(self) -> dict:
        """Get database statistics."""
        with self._get_connection() as conn:
            log_count = conn.execute(
                "SELECT COUNT(*) AS cnt FROM pr_logs"
            ).fetchone()["cnt"]
            goal_counts = {
                row["status"]: row["cnt"]
                for row in conn.execute(
                    "SELECT status, COUNT(*) AS cnt FROM goals GROUP BY status"
                ).fetchall()
            }
            check_in_count = conn.execute(
                "SELECT COUNT(*) AS cnt FROM daily_check_ins"
            ).fetchone()["cnt"]
            training_days = conn.execute(
                "SELECT COUNT(*) AS cnt FROM daily_check_ins WHERE type = ?",
                (CheckInType.TRAINING.value,),
            ).fetchone()["cnt"]
            item_count = conn.execute(
                "SELECT COUNT(DISTINCT item_id) AS cnt FROM pr_logs"
            ).fetchone()["cnt"]

            return {
                "total_logs": log_count,
                "items_logged": item_count,
                "active_goals": goal_counts.get(GoalStatus.ACTIVE.value, 0),
                "achieved_goals": goal_counts.get(GoalStatus.ACHIEVED.value, 0),
                "cancelled_goals": goal_counts.get(GoalStatus.CANCELLED.value, 0),
                "check_ins": check_in_count,
                "training_days": training_days,
                "db_path": str(self.db_path),
            }
