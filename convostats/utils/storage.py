"""
Storage utility.

Atomic file writes for report persistence.
"""

import logging
import os
import tempfile
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file output for a single directory.

    Every write goes to a temp file in the target directory first and is
    then renamed into place, so readers never see a partial file.
    """

    def __init__(self, output_dir: str):
        """
        Initialize storage manager.

        Args:
            output_dir: Directory that receives the files
        """
        self.output_dir = str(output_dir)
        logger.info(f"Initialized StorageManager with output_dir={self.output_dir}")

    def path_for(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)

    def write_text_atomic(self, filename: str, text: str) -> str:
        """Write one text file atomically. Returns its path."""
        return self.write_text_files_atomic({filename: text})[filename]

    def write_text_files_atomic(self, files: Dict[str, str]) -> Dict[str, str]:
        """
        Write several UTF-8 text files as one unit.

        Contents are staged in temp files first. Existing targets are then
        moved aside to backups and the temp files renamed into place. On any
        failure the new files are removed, the backups restored and the temp
        files deleted, so either every target has its new content or every
        target keeps its previous state.

        Args:
            files: Filename -> text content

        Returns:
            Filename -> written path

        Raises:
            OSError: If the directory or any file cannot be written
        """
        staged: List[Tuple[str, str]] = []  # (temp path, final path)
        backups: List[Tuple[str, str]] = []  # (backup path, final path)
        installed: List[str] = []  # final paths now holding new content
        try:
            os.makedirs(self.output_dir, exist_ok=True)

            for filename, text in files.items():
                fd, temp_path = tempfile.mkstemp(
                    prefix=f".{filename}.",
                    suffix=".tmp",
                    dir=self.output_dir
                )
                staged.append((temp_path, self.path_for(filename)))
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())

            for _, final_path in staged:
                if os.path.exists(final_path):
                    backups.append((self._move_aside(final_path), final_path))

            for temp_path, final_path in staged:
                os.replace(temp_path, final_path)
                installed.append(final_path)

        except OSError as e:
            logger.error(f"Failed to write {', '.join(files)} to {self.output_dir}: {e}")
            self._rollback(staged, backups, installed)
            raise

        for backup_path, _ in backups:
            self._remove(backup_path)

        written = {filename: self.path_for(filename) for filename in files}
        logger.info(f"Saved {len(written)} files to {self.output_dir}")
        return written

    def _move_aside(self, final_path: str) -> str:
        """Rename an existing file to a fresh backup path and return it."""
        fd, backup_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(final_path)}.",
            suffix=".bak",
            dir=self.output_dir
        )
        os.close(fd)
        try:
            os.replace(final_path, backup_path)
        except OSError:
            self._remove(backup_path)
            raise
        return backup_path

    def _rollback(
        self,
        staged: List[Tuple[str, str]],
        backups: List[Tuple[str, str]],
        installed: List[str]
    ) -> None:
        for final_path in installed:
            self._remove(final_path)

        for backup_path, final_path in backups:
            try:
                os.replace(backup_path, final_path)
            except OSError as e:
                logger.error(f"Could not restore {final_path} from {backup_path}: {e}")

        for temp_path, final_path in staged:
            if final_path not in installed:
                self._remove(temp_path)

    def _remove(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
