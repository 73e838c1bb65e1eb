"""
Board data model.

A board is a directory under tasks_dir. Each non-hidden subdirectory is a
Lane; each non-hidden *.md file inside a lane is a Card. Cards have no ID
of their own: the filename (minus .md) is the identity.
"""
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

CARD_SUFFIX = ".md"


def is_hidden(name: str) -> bool:
    return name.startswith(".")


@dataclass
class Card:
    """One markdown file in a lane."""
    name: str
    content: str
    last_updated: datetime
    created_at: datetime

    @classmethod
    def from_file(cls, path: Path) -> "Card":
        """Read a card's content and timestamps. OSError propagates."""
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
        st = path.stat()
        # st_birthtime only exists on platforms that record creation time
        created = getattr(st, "st_birthtime", st.st_ctime)
        return cls(
            name=path.name[: -len(CARD_SUFFIX)],
            content=content,
            last_updated=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "content": self.content,
            "lastUpdated": self.last_updated.isoformat(),
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class Lane:
    """A lane directory and the cards inside it, in enumeration order."""
    name: str
    files: List[Card] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "files": [c.to_dict() for c in self.files],
        }


def is_card_file(entry: os.DirEntry) -> bool:
    return (
        entry.name.endswith(CARD_SUFFIX)
        and not is_hidden(entry.name)
        and entry.is_file()
    )
