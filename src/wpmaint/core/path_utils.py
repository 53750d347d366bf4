"""Path utilities for wpmaint."""

import os
from pathlib import Path
from typing import Optional

DEFAULT_SENTINEL_NAME = ".maintenance"


def get_installation_dir(path: Optional[Path] = None) -> Path:
    """Resolve the installation root directory.

    Args:
        path: Explicit installation directory. If None, uses WPMAINT_PATH env var
            or the current directory.

    Returns:
        Path to the installation root
    """
    if path is None:
        env_dir = os.environ.get("WPMAINT_PATH")
        if env_dir:
            path = Path(env_dir)

    return Path(path).expanduser() if path else Path.cwd()


def get_sentinel_path(
    installation_dir: Path, sentinel_name: str = DEFAULT_SENTINEL_NAME
) -> Path:
    """Get path to the maintenance sentinel file.

    Args:
        installation_dir: Installation root directory
        sentinel_name: File name of the sentinel

    Returns:
        Path to the sentinel file
    """
    return Path(installation_dir) / sentinel_name


def is_writable(path: Path) -> bool:
    """Check whether the current process may write to a file or directory."""
    return os.access(path, os.W_OK)
