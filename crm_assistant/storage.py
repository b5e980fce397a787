"""Flat-file storage for saved assistant responses."""

import os
import time
from pathlib import Path

from crm_assistant.exceptions import StorageError
from crm_assistant.logging import get_logger

logger = get_logger("storage")

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def timestamped_filename(prefix: str, *parts: str, now: float | None = None) -> str:
    """
    Build a markdown filename such as ``analysis_deals_2025-06-02_14-30-45.md``.

    Args:
        prefix: Leading word (research, analysis, automation).
        *parts: Extra qualifiers inserted before the timestamp.
        now: Unix time to format; defaults to the current time.
    """
    stamp = time.strftime(TIMESTAMP_FORMAT, time.localtime(now))
    return "_".join([prefix, *parts, stamp]) + ".md"


class ResponseStore:
    """
    Writes response text below a directory.

    Args:
        directory: Target directory, created on first save. Defaults to
            ``settings.storage.directory``.
    """

    def __init__(self, directory: str | Path | None = None):
        if directory is None:
            from crm_assistant.config import settings
            directory = settings.storage.directory
        self.directory = Path(directory)

    def save(self, filename: str, text: str) -> Path:
        """Write ``text`` to ``directory/filename`` and return the path.

        The text is written to a temporary file next to the target and then
        moved into place, so a reader never sees a partial response.
        """
        path = self.directory / filename
        temp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            temp_path.replace(path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Could not write {path}: {e}", path=str(path)) from e
        logger.info("Response saved", path=str(path), chars=len(text))
        return path
