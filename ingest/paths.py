"""
BookmarkShelf v1 - Bookmarks File Location

The browser profile directory is passed in explicitly; callers resolve it
from configuration (``USERPROFILE``) rather than reading the environment here.
"""

from pathlib import Path

from .errors import NotFoundError

DEFAULT_PROFILE = "Default"

# Chrome user data location relative to the Windows user profile directory
CHROME_USER_DATA = ("AppData", "Local", "Google", "Chrome", "User Data")


def chrome_bookmarks_path(base_dir: str | Path, profile: str = DEFAULT_PROFILE) -> Path:
    """Candidate path of the ``Bookmarks`` file under a user profile directory"""
    return Path(base_dir).joinpath(*CHROME_USER_DATA, profile, "Bookmarks")


def locate_bookmarks_file(
    base_dir: str | Path | None,
    profile: str = DEFAULT_PROFILE,
) -> Path:
    """
    Find the ``Bookmarks`` file for a browser profile.

    Args:
        base_dir: User profile directory, e.g. the value of USERPROFILE
        profile: Chrome profile folder name

    Returns:
        Path to an existing bookmarks file

    Raises:
        NotFoundError: if base_dir is unset or the file does not exist
    """
    if not base_dir:
        raise NotFoundError("User profile directory is not set (USERPROFILE)")

    path = chrome_bookmarks_path(base_dir, profile)
    if not path.is_file():
        raise NotFoundError(f"Bookmarks file not found: {path}")
    return path
