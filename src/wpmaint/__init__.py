"""wpmaint - maintenance mode control for WordPress installations."""

from wpmaint.config import Config, MaintenanceSettings
from wpmaint.core.maintenance import MaintenanceController

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("wpmaint")
except PackageNotFoundError:
    # Package metadata is not available when running from a source checkout
    __version__ = "1.0.0"

__all__ = ["Config", "MaintenanceSettings", "MaintenanceController"]
