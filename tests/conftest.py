"""Pytest configuration and shared fixtures."""

import pytest

from wpmaint.config import MaintenanceSettings
from wpmaint.core.maintenance import MaintenanceController

# Epoch used as "now" by the fake clock
START = 1_700_000_000


class FakeClock:
    """Manually advanced clock for simulating elapsed time."""

    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure settings never leak in from the environment."""
    for name in (
        "WPMAINT_PATH",
        "WPMAINT_DEFAULT_DURATION",
        "WPMAINT_SENTINEL_NAME",
        "WPMAINT_VARIABLE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def installation(tmp_path):
    """An empty installation directory."""
    path = tmp_path / "wordpress"
    path.mkdir()
    return path


@pytest.fixture
def controller(installation, clock):
    """Controller for the temporary installation, driven by the fake clock."""
    settings = MaintenanceSettings(installation_dir=installation)
    return MaintenanceController(settings, clock=clock)
