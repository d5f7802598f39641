from __future__ import annotations

from pathlib import Path


def archive_report(file_name: str, *, file_loc: str | Path, archive_loc: str | Path) -> Path:
    """
    Move `file_name` out of `file_loc` into `archive_loc`, under the same name.

    The archive directory is created if missing ("already exists" is fine).
    The move is a single `rename`, so it is atomic on one filesystem.

    Returns the archived path.
    Raises `OSError` (`FileNotFoundError` when the source is already gone).
    """
    archive_dir = Path(archive_loc)
    archive_dir.mkdir(parents=True, exist_ok=True)
    return (Path(file_loc) / file_name).rename(archive_dir / file_name)
