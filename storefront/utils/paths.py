# ==============================================================================
# Path Utilities
# ==============================================================================
"""
Project root detection for resolving relative data paths.
"""

from pathlib import Path


def get_project_root() -> Path:
    """
    Get the project root directory.

    Searches upward from the current file for a directory containing
    pyproject.toml. Falls back to current working directory if not found.

    Returns:
        Path to the project root directory
    """
    # Start from this file's location and walk up
    current = Path(__file__).parent.parent.parent  # utils/paths.py -> storefront -> project
    if (current / "pyproject.toml").exists():
        return current

    return Path.cwd()
