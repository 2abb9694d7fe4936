"""Parsing and formatting of logged results.

Results are entered as strings ("4:32", "100", "18+5") and stored as a
normalized numeric value so they can be compared.
"""

import re
from typing import Optional

from .db.models import ScoreType


_ROUNDS_REPS = re.compile(r"^(\d+)\+(\d+)$")


def parse_time_to_seconds(time_str: str) -> int:
    """Parse time string (H:MM:SS or MM:SS) to seconds.

    Returns 0 for anything that is not two or three colon-separated numbers.
    """
    parts = time_str.strip().split(":")
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return 0

    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return hours * 3600 + minutes * 60 + seconds
    elif len(numbers) == 2:
        minutes, seconds = numbers
        return minutes * 60 + seconds
    return 0


def format_seconds_to_time(seconds: float) -> str:
    """Format seconds as H:MM:SS or MM:SS string."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        return f"{minutes}:{secs:02d}"


def parse_rounds_reps(value: str) -> int:
    """Parse "18+5" to 1805 (rounds * 100 + reps); a bare number is reps."""
    match = _ROUNDS_REPS.match(value.strip())
    if match:
        rounds = int(match.group(1))
        reps = int(match.group(2))
        return rounds * 100 + reps
    try:
        return int(value)
    except ValueError:
        return 0


def _parse_number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def parse_result_to_value(result: str, score_type: ScoreType) -> float:
    """Parse any result string to its normalized numeric value."""
    if score_type == ScoreType.TIME:
        return parse_time_to_seconds(result)
    if score_type == ScoreType.ROUNDS_REPS:
        return parse_rounds_reps(result)
    return _parse_number(result)


def format_value_as_result(value: float, score_type: ScoreType, unit: Optional[str] = None) -> str:
    """Format a normalized value back into a result string."""
    if score_type == ScoreType.TIME:
        return format_seconds_to_time(value)
    if score_type == ScoreType.LOAD:
        return f"{value:g}{unit or ''}"
    if score_type == ScoreType.DISTANCE:
        return f"{value:g}{unit or 'm'}"
    if score_type == ScoreType.ROUNDS_REPS:
        rounds = int(value // 100)
        reps = int(value % 100)
        return f"{rounds}+{reps}"
    return f"{value:g}"


def format_result(result: str, score_type: ScoreType, unit: Optional[str] = None) -> str:
    """Add the unit suffix to a logged result for display."""
    if score_type == ScoreType.LOAD:
        return f"{result}{unit or 'kg'}"
    if score_type == ScoreType.REPS:
        return f"{result} reps"
    if score_type == ScoreType.DISTANCE:
        return f"{result}{unit or 'm'}"
    if score_type == ScoreType.CALORIES:
        return f"{result} cal"
    return result


def get_reps_label(reps: Optional[int]) -> str:
    """Label for a rep scheme: "1RM", "3RM", "8 reps"."""
    if reps is None:
        return ""
    if reps == 1:
        return "1RM"
    if reps <= 5:
        return f"{reps}RM"
    return f"{reps} reps"
