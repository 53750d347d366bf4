"""Reading and writing the maintenance sentinel file.

The sentinel uses the host platform's own format, a one-line PHP fragment::

    <?php $upgrading = 1700000000;

The assigned expression is either an integer literal (epoch seconds) or
``time()``, optionally followed by ``+ N`` / ``- N``. ``time()`` is evaluated
when the file is read, so a flag written with it never expires.
"""

import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from wpmaint.core.exceptions import MaintenanceIOError, SentinelParseError

logger = logging.getLogger(__name__)

DEFAULT_VARIABLE = "upgrading"

_STATEMENT_PATTERN = re.compile(
    r"^\s*<\?php\s+\$(?P<variable>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*"
    r"(?P<expression>[^;]*?)\s*;?\s*(?:\?>)?\s*$"
)

_EXPRESSION_PATTERN = re.compile(
    r"^(?:(?P<live>time\(\s*\))(?:\s*(?P<sign>[+-])\s*(?P<offset>\d+))?"
    r"|(?P<literal>[+-]?\d+))$"
)


class SentinelValue(BaseModel):
    """Value assigned in the sentinel file."""

    model_config = ConfigDict(frozen=True)

    live: bool = Field(
        default=False, description="Expression is evaluated against the clock on read"
    )
    epoch: int = Field(
        default=0, description="Literal epoch seconds, or offset from now when live"
    )

    def resolve(self, now: float) -> int:
        """Return the effective stored epoch at time ``now``."""
        if self.live:
            return int(now) + self.epoch
        return self.epoch

    def to_expression(self) -> str:
        """Render the value as the right-hand side of the assignment."""
        if not self.live:
            return str(self.epoch)
        if self.epoch == 0:
            return "time()"
        sign = "+" if self.epoch > 0 else "-"
        return f"time() {sign} {abs(self.epoch)}"


def encode_sentinel(value: SentinelValue, variable: str = DEFAULT_VARIABLE) -> str:
    """Build the sentinel file contents for a value."""
    return f"<?php ${variable} = {value.to_expression()};"


def decode_sentinel(text: str, variable: str = DEFAULT_VARIABLE) -> SentinelValue:
    """Parse sentinel file contents.

    Args:
        text: Raw file contents
        variable: Variable name the assignment must target

    Returns:
        Decoded sentinel value

    Raises:
        SentinelParseError: If the contents are not a recognised assignment
    """
    match = _STATEMENT_PATTERN.match(text)
    if not match:
        raise SentinelParseError("Maintenance file is not a valid assignment")

    if match.group("variable") != variable:
        raise SentinelParseError(
            f"Maintenance file assigns '${match.group('variable')}', expected '${variable}'"
        )

    expression = match.group("expression")
    parsed = _EXPRESSION_PATTERN.match(expression)
    if not parsed:
        raise SentinelParseError(
            f"Unsupported expression in maintenance file: '{expression}'"
        )

    if parsed.group("literal") is not None:
        return SentinelValue(live=False, epoch=int(parsed.group("literal")))

    offset = int(parsed.group("offset") or 0)
    if parsed.group("sign") == "-":
        offset = -offset
    return SentinelValue(live=True, epoch=offset)


def read_sentinel(path: Path, variable: str = DEFAULT_VARIABLE) -> SentinelValue:
    """Read and decode the sentinel file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SentinelParseError(f"Couldn't read file {path}: {e}") from e

    try:
        value = decode_sentinel(text, variable)
    except SentinelParseError as e:
        raise SentinelParseError(f"{e} ({path})") from e

    logger.debug(f"Read maintenance value {value.to_expression()} from {path}")
    return value


def write_sentinel(
    path: Path, value: SentinelValue, variable: str = DEFAULT_VARIABLE
) -> None:
    """Write ``value`` to the sentinel file, replacing any previous contents.

    Raises:
        MaintenanceIOError: If the file cannot be written
    """
    try:
        Path(path).write_text(encode_sentinel(value, variable), encoding="utf-8")
    except OSError as e:
        logger.debug(f"Failed to write maintenance file {path}: {e}")
        raise MaintenanceIOError(
            "Maintenance mode couldn't be enabled. Please, try again"
        ) from e

    logger.debug(f"Wrote maintenance value {value.to_expression()} to {path}")
