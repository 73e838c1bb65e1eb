"""
Board enumeration: one board directory -> ordered lanes of cards.

Order is whatever the filesystem returns; no sorting is applied here
(the front end orders lanes and cards using sort.json).
"""
import logging
import os
from pathlib import Path
from typing import List, Union

from .errors import StorageError
from .paths import resolve
from .schema import Card, Lane, is_card_file, is_hidden

logger = logging.getLogger(__name__)


class BoardTree:
    """Reads boards under a tasks root."""

    def __init__(self, tasks_dir: Union[str, Path]):
        self.tasks_dir = Path(tasks_dir)

    def list_board(self, board_path: str) -> List[Lane]:
        """
        Enumerate a board into lanes.

        A board seen for the first time is created and comes back empty.
        Any I/O failure fails the whole listing.
        """
        board_dir = resolve(self.tasks_dir, board_path)

        try:
            if not board_dir.exists():
                board_dir.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created board {board_path!r}")
                return []

            lanes = []
            with os.scandir(board_dir) as entries:
                for entry in entries:
                    if is_hidden(entry.name) or not entry.is_dir():
                        continue
                    lanes.append(Lane(name=entry.name, files=self._read_lane(Path(entry.path))))
            return lanes
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read board {board_path!r}: {e}") from e

    @staticmethod
    def _read_lane(lane_dir: Path) -> List[Card]:
        cards = []
        with os.scandir(lane_dir) as entries:
            for entry in entries:
                if is_card_file(entry):
                    cards.append(Card.from_file(Path(entry.path)))
        return cards
