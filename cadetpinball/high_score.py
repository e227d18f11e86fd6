"""The five-entry high score table and its checksummed persistence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .options import Settings

__all__ = ["HighScore", "HighScoreTable", "TABLE_SIZE", "EMPTY_SCORE", "MAX_NAME_LENGTH"]

TABLE_SIZE = 5
EMPTY_SCORE = -999
MAX_NAME_LENGTH = 31


@dataclass
class HighScore:
    name: str = ""
    score: int = EMPTY_SCORE


def _name_checksum(name: str) -> int:
    return sum(b - 256 if b > 127 else b for b in name.encode("utf-8"))


class HighScoreTable:
    """Top scores, best first."""

    def __init__(self, entries: Optional[Iterable[HighScore]] = None) -> None:
        self.entries = list(entries) if entries is not None else []
        if entries is None:
            self.clear()
        elif len(self.entries) != TABLE_SIZE:
            raise ValueError(f"a high score table has {TABLE_SIZE} entries")

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[HighScore]:
        return iter(self.entries)

    def __getitem__(self, position: int) -> HighScore:
        return self.entries[position]

    def _checksum(self) -> int:
        return sum(_name_checksum(e.name) + e.score for e in self.entries)

    @classmethod
    def read(cls, settings: Settings) -> "HighScoreTable":
        """Load the table; a failed checksum leaves it empty."""
        table = cls()
        for position, entry in enumerate(table.entries):
            entry.name = settings.get_string(f"{position}.Name", "")[:MAX_NAME_LENGTH]
            entry.score = settings.get_int(f"{position}.Score", entry.score)
        if table._checksum() != settings.get_int("Verification", 7):
            table.clear()
        return table

    def write(self, settings: Settings) -> None:
        """Store the table along with its checksum."""
        for position, entry in enumerate(self.entries):
            settings.set_string(f"{position}.Name", entry.name)
            settings.set_int(f"{position}.Score", entry.score)
        settings.set_int("Verification", self._checksum())

    def clear(self) -> None:
        self.entries = [HighScore() for _ in range(TABLE_SIZE)]

    def score_position(self, score: int) -> int:
        """Position a score would take, or -1 if it does not qualify."""
        if score <= 0:
            return -1
        for position, entry in enumerate(self.entries):
            if entry.score < score:
                return position
        return -1

    def place_new_score(self, score: int, name: str, position: int) -> int:
        """Insert a score at ``position``, pushing lower entries down.

        A negative position leaves the table alone. Returns ``position``.
        """
        if position < 0:
            return position
        if position >= TABLE_SIZE:
            raise IndexError(f"high score position {position} out of range")
        self.entries.insert(position, HighScore(name[:MAX_NAME_LENGTH], score))
        del self.entries[TABLE_SIZE:]
        return position