"""
Logical path helpers.

A logical path is a slash-separated string relative to a configured root
(tasks_dir for board/lane/card operations). No traversal checks are made:
the only caller is the local desktop shell.
"""
import os
from pathlib import Path
from typing import Union

# Characters that are illegal in a filename on at least one supported OS
ILLEGAL_NAME_CHARS = '<>:"/\\|?*'

_ILLEGAL_TABLE = str.maketrans({c: " " for c in ILLEGAL_NAME_CHARS})


def resolve(root: Union[str, Path], logical_path: str) -> Path:
    """Join a logical path onto root. Leading slashes are dropped."""
    return Path(root) / logical_path.lstrip("/")


def sanitize_name(logical_path: str) -> str:
    """
    Replace filesystem-illegal characters in the last path segment with spaces.

    Directory segments and the '/' separators between them are kept as-is:
        'a/b/c?.md'  -> 'a/b/c .md'
        'a/b:c/d.md' -> 'a/b:c/d.md'
    """
    head, sep, name = logical_path.rpartition("/")
    return head + sep + name.translate(_ILLEGAL_TABLE)


def write_in_place(path: Union[str, Path], text: str) -> None:
    """Truncate and write text in place, line endings untouched."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def atomic_write(path: Union[str, Path], data: Union[str, bytes]) -> None:
    """Write data to a sibling temp file, then rename it over path."""
    path = Path(path)
    tmp_file = path.with_name(path.name + ".tmp")
    mode = "wb" if isinstance(data, bytes) else "w"
    kwargs = {} if isinstance(data, bytes) else {"encoding": "utf-8", "newline": ""}
    try:
        with open(tmp_file, mode, **kwargs) as f:
            f.write(data)
        os.replace(tmp_file, path)
    except OSError:
        tmp_file.unlink(missing_ok=True)
        raise
