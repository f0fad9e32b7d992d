"""Seats around the table and partnership helpers."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator

SEAT_COUNT = 4


class Seat(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_index(cls, index: int) -> "Seat":
        """Checked conversion from a table position."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError(f"Seat index must be an integer, got {index!r}.")
        if not 0 <= index < SEAT_COUNT:
            raise ValueError(f"Seat index {index} is outside 0..{SEAT_COUNT - 1}.")
        return cls(index)

    def next(self) -> "Seat":
        return Seat((self.value + 1) % SEAT_COUNT)

    def partner(self) -> "Seat":
        return Seat((self.value + 2) % SEAT_COUNT)

    @property
    def team(self) -> int:
        return self.value % 2


def partner(seat: Seat) -> Seat:
    return seat.partner()


def seats_from(start: Seat) -> Iterator[Seat]:
    """Yield all four seats in play order beginning with ``start``."""
    seat = start
    for _ in range(SEAT_COUNT):
        yield seat
        seat = seat.next()
