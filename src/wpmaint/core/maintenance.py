"""Maintenance mode control for wpmaint."""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from wpmaint.config import MaintenanceSettings
from wpmaint.core.duration import DurationKind, DurationRequest, parse_duration
from wpmaint.core.exceptions import (
    MaintenanceConflictError,
    MaintenanceIOError,
    MaintenancePermissionError,
)
from wpmaint.core.path_utils import is_writable
from wpmaint.core.sentinel import SentinelValue, read_sentinel, write_sentinel

logger = logging.getLogger(__name__)


class EnableResult(BaseModel):
    """Outcome of enabling maintenance mode."""

    was_enabled: bool = Field(description="Maintenance mode was active before the call")
    value: SentinelValue = Field(description="Value written to the sentinel")
    warnings: List[str] = Field(default_factory=list)


class DisableResult(BaseModel):
    """Outcome of disabling maintenance mode."""

    disabled: bool = Field(description="The sentinel file was removed")
    warnings: List[str] = Field(default_factory=list)


class MaintenanceController:
    """Enables, disables and reports maintenance mode for one installation.

    A stored timestamp counts as active while ``now - stored`` is smaller than
    ``settings.default_duration``. Longer or shorter windows are written as
    ``now + (requested - default_duration)`` so that the fixed window
    reproduces the requested one.
    """

    def __init__(
        self,
        settings: MaintenanceSettings,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize controller.

        Args:
            settings: Installation settings
            clock: Returns the current epoch seconds (defaults to time.time)
        """
        self.settings = settings
        self.clock = clock or time.time

    @property
    def installation_dir(self) -> Path:
        return self.settings.installation_dir

    @property
    def sentinel_path(self) -> Path:
        return self.settings.sentinel_path

    def read_flag(self) -> Optional[SentinelValue]:
        """Read the stored value, or None if the sentinel does not exist."""
        if not self.sentinel_path.exists():
            return None
        return read_sentinel(self.sentinel_path, self.settings.variable)

    def is_active(self) -> bool:
        """Check whether maintenance mode is currently active.

        Raises:
            SentinelParseError: If the sentinel exists but cannot be read
        """
        value = self.read_flag()
        if value is None:
            return False

        now = self.clock()
        active = now - value.resolve(now) < self.settings.default_duration
        logger.debug(
            f"Maintenance value {value.to_expression()} is "
            f"{'active' if active else 'expired'} at {int(now)}"
        )
        return active

    def expires_at(self) -> Optional[int]:
        """Epoch at which maintenance mode stops, None if inactive or never expiring."""
        value = self.read_flag()
        if value is None or value.live:
            return None
        if not self.is_active():
            return None
        return value.epoch + self.settings.default_duration

    def status(self) -> int:
        """Return 1 if maintenance mode is active, 0 otherwise."""
        return int(self.is_active())

    def compute_upgrading_value(
        self, request: DurationRequest, now: Optional[float] = None
    ) -> SentinelValue:
        """Compute the value to store for a requested duration."""
        if request.kind == DurationKind.FOREVER:
            return SentinelValue(live=True, epoch=0)

        offset = 0
        if request.seconds:
            offset = request.seconds - self.settings.default_duration

        if now is None:
            now = self.clock()
        return SentinelValue(live=False, epoch=int(now) + offset)

    def _check_permissions(self) -> None:
        sentinel = self.sentinel_path
        if not sentinel.exists() and not is_writable(self.installation_dir):
            raise MaintenancePermissionError(
                f"Insufficient permission to create file '{sentinel}'."
            )
        if sentinel.exists() and not is_writable(sentinel):
            raise MaintenancePermissionError(
                f"Insufficient permission to overwrite file '{sentinel}'."
            )

    def enable(self, duration: Optional[str] = None, force: bool = False) -> EnableResult:
        """Enable maintenance mode.

        Args:
            duration: Raw --duration value ('default', 'forever', seconds or a date/time)
            force: Allow overwriting an active flag and using 'forever'

        Returns:
            EnableResult describing what was written

        Raises:
            DurationValidationError: If the duration is invalid
            MaintenancePermissionError: If the sentinel cannot be created or overwritten
            MaintenanceConflictError: If maintenance mode is active and force is not set
            MaintenanceIOError: If the sentinel cannot be written
        """
        now = self.clock()
        request = parse_duration(duration, force=force, now=now)
        value = self.compute_upgrading_value(request, now=now)

        self._check_permissions()

        was_enabled = self.is_active()
        if was_enabled and not force:
            raise MaintenanceConflictError(
                "Maintenance mode already enabled. For overwrite duration use --force option"
            )

        write_sentinel(self.sentinel_path, value, self.settings.variable)

        logger.info(
            f"Maintenance mode {'updated' if was_enabled else 'enabled'} "
            f"in {self.installation_dir} ({request.kind.value}, {value.to_expression()})"
        )
        return EnableResult(
            was_enabled=was_enabled, value=value, warnings=list(request.warnings)
        )

    def disable(self) -> DisableResult:
        """Disable maintenance mode.

        An expired sentinel is left in place and reported as already disabled.

        Raises:
            MaintenanceIOError: If the sentinel cannot be deleted
        """
        if not self.is_active():
            logger.debug(f"Maintenance mode not active in {self.installation_dir}")
            return DisableResult(
                disabled=False, warnings=["Maintenance mode already disabled"]
            )

        sentinel = self.sentinel_path
        try:
            sentinel.unlink()
        except OSError as e:
            logger.debug(f"Failed to delete {sentinel}: {e}")
            raise MaintenanceIOError(f"Couldn't delete file {sentinel}") from e

        logger.info(f"Maintenance mode disabled in {self.installation_dir}")
        return DisableResult(disabled=True)
