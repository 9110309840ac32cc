"""Cron expression normalization and validation.

Gateway jobs may carry either:
- 5 fields: minute hour day month weekday
- 6 fields: second minute hour day month weekday

Everything here works on the 5-field form.
"""

from croniter import croniter
from datetime import datetime
from typing import Optional
import logging

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday",
                 "Thursday", "Friday", "Saturday"]

COMMON_PATTERNS = {
    "* * * * *": "Every minute",
    "*/5 * * * *": "Every 5 minutes",
    "*/10 * * * *": "Every 10 minutes",
    "*/15 * * * *": "Every 15 minutes",
    "*/30 * * * *": "Every 30 minutes",
    "0 * * * *": "Every hour",
    "0 */2 * * *": "Every 2 hours",
    "0 */6 * * *": "Every 6 hours",
    "0 */12 * * *": "Every 12 hours",
    "0 0 * * *": "Daily at midnight",
    "0 9 * * *": "Daily at 9:00 AM",
    "0 12 * * *": "Daily at noon",
    "0 9 * * 1-5": "Weekdays at 9:00 AM",
    "0 0 * * 0": "Weekly on Sunday at midnight",
    "0 0 * * 1": "Weekly on Monday at midnight",
    "0 0 1 * *": "Monthly on the 1st at midnight",
    "0 0 1 1 *": "Yearly on January 1st at midnight",
}


def normalize_cron_expression(expr: Optional[str]) -> Optional[str]:
    """Normalize a cron expression to its 5-field form.

    Args:
        expr: Cron expression with 5 or 6 whitespace-separated fields

    Returns:
        The 5-field expression joined by single spaces, or None when the
        input is blank or has any other field count
    """
    if not expr or not expr.strip():
        return None

    # str.split() does not treat a byte order mark as whitespace
    parts = expr.replace("\ufeff", " ").split()
    if len(parts) == 5:
        return " ".join(parts)
    if len(parts) == 6:
        return " ".join(parts[1:])
    return None


def validate_cron(expression: Optional[str]) -> bool:
    """Validate a cron expression.

    Args:
        expression: Cron expression string (e.g., "0 */2 * * *")

    Returns:
        True if valid, False otherwise
    """
    normalized = normalize_cron_expression(expression)
    if normalized is None:
        logger.warning(f"Invalid cron expression '{expression}': unsupported field count")
        return False

    try:
        croniter(normalized)
        return True
    except (ValueError, TypeError, KeyError) as e:
        logger.warning(f"Invalid cron expression '{expression}': {e}")
        return False


def next_run_time(expression: Optional[str], base_time: Optional[datetime] = None) -> Optional[datetime]:
    """Get the next execution time of a cron expression.

    Args:
        expression: Cron expression string
        base_time: Base time for calculation (default: now)

    Returns:
        Next execution datetime or None if invalid
    """
    normalized = normalize_cron_expression(expression)
    if normalized is None:
        return None

    try:
        base = base_time or datetime.utcnow()
        cron = croniter(normalized, base)
        return cron.get_next(datetime)
    except (ValueError, TypeError, KeyError) as e:
        logger.error(f"Failed to compute next run for '{expression}': {e}")
        return None


def _describe_month(month: str) -> str:
    if month.isdigit() and 1 <= int(month) <= 12:
        return f"in {MONTH_NAMES[int(month) - 1]}"
    return f"in month {month}"


def _describe_weekday(weekday: str) -> str:
    if weekday.isdigit() and 0 <= int(weekday) <= 6:
        return f"on {WEEKDAY_NAMES[int(weekday)]}"
    return f"on weekday {weekday}"


def describe_cron(expression: Optional[str]) -> str:
    """Get human-readable description of cron expression.

    Args:
        expression: Cron expression string

    Returns:
        Human-readable description, or the input itself when it cannot be
        normalized
    """
    normalized = normalize_cron_expression(expression)
    if normalized is None:
        return expression or ""

    if normalized in COMMON_PATTERNS:
        return COMMON_PATTERNS[normalized]

    minute, hour, day, month, weekday = normalized.split(" ")
    desc_parts = []

    if minute != "*":
        if minute.startswith("*/"):
            desc_parts.append(f"every {minute[2:]} minutes")
        else:
            desc_parts.append(f"at minute {minute}")

    if hour != "*":
        if hour.startswith("*/"):
            desc_parts.append(f"every {hour[2:]} hours")
        else:
            desc_parts.append(f"at hour {hour}")

    if day != "*":
        desc_parts.append(f"on day {day}")

    if month != "*":
        desc_parts.append(_describe_month(month))

    if weekday != "*":
        desc_parts.append(_describe_weekday(weekday))

    if desc_parts:
        return "Runs " + ", ".join(desc_parts)
    return "Every minute"
