"""File system helpers."""

from pathlib import Path
from typing import Optional

from newsdesk.utils.exceptions import OutputError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

CHECK_NAME = "..__write_check__"


def ensure_writable_dir(path: Path) -> Path:
    """Create a directory if needed and check that files can be written in it.

    Args:
        path: Directory path

    Returns:
        The directory path

    Raises:
        OutputError: If the directory cannot be created or written to
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
        marker = path / CHECK_NAME
        marker.write_text("", encoding="utf-8")
        marker.unlink()
    except OSError as e:
        raise OutputError(f"Output directory is not writable: {path}: {e}") from e

    logger.debug("output_directory_writable", path=str(path))
    return path


def read_text_if_exists(path: Path) -> Optional[str]:
    """Read a UTF-8 text file, returning None when it does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
