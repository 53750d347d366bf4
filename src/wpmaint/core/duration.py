"""Parsing of the --duration option."""

import logging
import re
import time
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from wpmaint.core.exceptions import DurationValidationError

logger = logging.getLogger(__name__)

_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_RELATIVE_TERM_PATTERN = re.compile(r"([+-]?)\s*(\d+)\s*([a-z]+)")

# Unit spellings accepted in relative expressions, mapped to relativedelta fields
_RELATIVE_UNITS = {
    "s": "seconds",
    "sec": "seconds",
    "secs": "seconds",
    "second": "seconds",
    "seconds": "seconds",
    "min": "minutes",
    "mins": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "h": "hours",
    "hr": "hours",
    "hrs": "hours",
    "hour": "hours",
    "hours": "hours",
    "d": "days",
    "day": "days",
    "days": "days",
    "w": "weeks",
    "week": "weeks",
    "weeks": "weeks",
    "month": "months",
    "months": "months",
    "year": "years",
    "years": "years",
}

NO_VALUE_WARNING = "No value passed for duration option. Using 'default'"


class DurationKind(str, Enum):
    """How the requested maintenance window was expressed."""

    DEFAULT = "default"
    FOREVER = "forever"
    SECONDS = "seconds"
    UNTIL = "until"


class DurationRequest(BaseModel):
    """A validated --duration value."""

    kind: DurationKind = Field(description="How the duration was expressed")
    seconds: Optional[int] = Field(
        default=None, description="Requested total window in seconds"
    )
    warnings: List[str] = Field(default_factory=list)


def is_numeric(value: str) -> bool:
    """Check whether ``value`` is a plain number (integer, decimal or exponent form)."""
    return bool(_NUMERIC_PATTERN.match(value))


def _parse_relative(text: str, base: datetime) -> Optional[datetime]:
    """Resolve phrases like ``+1 hour``, ``2 days 3 hours`` or ``tomorrow``."""
    text = text.strip().lower()
    midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)

    if text == "now":
        return base
    if text == "today":
        return midnight
    if text == "tomorrow":
        return midnight + timedelta(days=1)

    ago = text.endswith(" ago")
    if ago:
        text = text[: -len(" ago")]

    delta = relativedelta()
    position = 0
    matched = False
    for match in _RELATIVE_TERM_PATTERN.finditer(text):
        if text[position : match.start()].strip():
            return None
        sign, amount, unit = match.groups()
        field = _RELATIVE_UNITS.get(unit)
        if field is None:
            return None
        amount = int(amount)
        if sign == "-":
            amount = -amount
        try:
            delta += relativedelta(**{field: amount})
        except (ValueError, OverflowError):
            return None
        position = match.end()
        matched = True

    if not matched or text[position:].strip():
        return None

    try:
        return base - delta if ago else base + delta
    except (ValueError, OverflowError):
        return None


def parse_datetime(value: str, now: float) -> Optional[float]:
    """Parse a date/time string into epoch seconds.

    Relative phrases are resolved against ``now``. Absolute values go through
    dateutil; naive values are taken as local time and missing fields
    default to today at midnight.

    Returns:
        Epoch seconds, or None if the value cannot be understood
    """
    base = datetime.fromtimestamp(now)

    moment = _parse_relative(value, base)
    if moment is None:
        default = base.replace(hour=0, minute=0, second=0, microsecond=0)
        try:
            moment = date_parser.parse(value, default=default)
        except (ValueError, OverflowError):
            return None

    try:
        return moment.timestamp()
    except (ValueError, OverflowError, OSError):
        return None


def parse_duration(
    value: Optional[str], force: bool = False, now: Optional[float] = None
) -> DurationRequest:
    """Validate a --duration value.

    Args:
        value: Raw option value, None when the option was not given
        force: Whether --force was given
        now: Current epoch seconds

    Returns:
        The validated request

    Raises:
        DurationValidationError: If the value is invalid
    """
    if value is None:
        return DurationRequest(kind=DurationKind.DEFAULT)

    if not value.strip():
        logger.debug("Empty duration given, falling back to default")
        return DurationRequest(kind=DurationKind.DEFAULT, warnings=[NO_VALUE_WARNING])

    if is_numeric(value):
        try:
            seconds = int(float(value))
        except OverflowError as e:
            raise DurationValidationError(f"Invalid duration value '{value}'") from e
        if seconds < 1:
            raise DurationValidationError(
                "Duration must be a time in seconds greater than zero"
            )
        return DurationRequest(kind=DurationKind.SECONDS, seconds=seconds)

    if value == DurationKind.FOREVER.value:
        if not force:
            raise DurationValidationError(
                "Value 'forever' must be used with --force option together"
            )
        return DurationRequest(kind=DurationKind.FOREVER)

    if value == DurationKind.DEFAULT.value:
        return DurationRequest(kind=DurationKind.DEFAULT)

    if now is None:
        now = time.time()

    target = parse_datetime(value, now)
    if target is None:
        raise DurationValidationError(f"Invalid duration value '{value}'")

    if int(target) <= int(now):
        raise DurationValidationError("Duration time must be greater than current time")

    logger.debug(f"Duration '{value}' resolved to epoch {int(target)}")
    return DurationRequest(kind=DurationKind.UNTIL, seconds=int(target) - int(now))
