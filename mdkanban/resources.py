"""
Board entry mutations: create, rename/move (+ optional content rewrite), delete.

All paths are logical paths under tasks_dir. OSErrors are translated to
ResourceNotFound (missing source) or StorageError (anything else).
"""
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from .errors import ResourceNotFound, StorageError
from .paths import resolve, sanitize_name, write_in_place

logger = logging.getLogger(__name__)


class ResourceMutator:
    """Writes to the board tree under a tasks root."""

    def __init__(self, tasks_dir: Union[str, Path]):
        self.tasks_dir = Path(tasks_dir)

    def create(self, path: str, is_file: bool = False, content: Optional[str] = None) -> None:
        """Write a card file (overwriting) or make a directory (idempotent)."""
        full_path = resolve(self.tasks_dir, path)
        try:
            if is_file:
                full_path.parent.mkdir(parents=True, exist_ok=True)
                write_in_place(full_path, content or "")
            else:
                full_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create {path!r}: {e}") from e
        logger.info(f"Created {'file' if is_file else 'directory'} {path!r}")

    def update(
        self,
        path: str,
        new_path: Optional[str] = None,
        content: Optional[str] = None,
    ) -> str:
        """
        Rename/move an entry and/or rewrite a card's content.

        The target name is sanitized (illegal characters in the last segment
        become spaces). Rename and rewrite are two separate steps; there is
        no atomicity across them. Returns the sanitized logical target.
        """
        target = sanitize_name(new_path or path)
        old_full = resolve(self.tasks_dir, path)
        new_full = resolve(self.tasks_dir, target)

        if old_full != new_full:
            self._move(path, target, old_full, new_full)

        if content is not None:
            self._rewrite(target, new_full, content)
        return target

    def _move(self, path: str, target: str, old_full: Path, new_full: Path) -> None:
        if not old_full.exists():
            raise ResourceNotFound(f"Cannot rename {path!r}: no such file or directory")
        try:
            new_full.parent.mkdir(parents=True, exist_ok=True)
            old_full.rename(new_full)
        except FileNotFoundError as e:
            raise ResourceNotFound(f"Cannot rename {path!r}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot rename {path!r} to {target!r}: {e}") from e
        logger.info(f"Moved {path!r} -> {target!r}")

    def _rewrite(self, target: str, full_path: Path, content: str) -> None:
        try:
            if not full_path.is_file():
                if not full_path.exists():
                    raise ResourceNotFound(f"Cannot update {target!r}: no such file")
                # Directory target: content has nothing to apply to
                return
            # In place, so the file keeps its inode and birth time
            write_in_place(full_path, content)
        except OSError as e:
            raise StorageError(f"Cannot write {target!r}: {e}") from e
        logger.info(f"Rewrote {target!r} ({len(content)} chars)")

    def delete(self, path: str) -> None:
        """Remove a directory recursively, or a single file."""
        full_path = resolve(self.tasks_dir, path)
        try:
            if full_path.is_dir():
                shutil.rmtree(full_path)
            else:
                full_path.unlink()
        except FileNotFoundError as e:
            raise ResourceNotFound(f"Cannot delete {path!r}: no such file or directory") from e
        except OSError as e:
            raise StorageError(f"Cannot delete {path!r}: {e}") from e
        logger.info(f"Deleted {path!r}")
