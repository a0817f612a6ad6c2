"""Core data types for the parking lot: slots, leave records and errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

PARK_MAX_NUMBER = 100
PARK_STATUS_FILE_NAME = "./data/parkStatus.csv"
PARK_LOG_FILE_NAME = "./data/log.csv"


class ParkingError(Exception):
    """Raised when a parking operation is refused."""


class SlotState(IntEnum):
    """State of a single parking slot, with the numeric codes used on disk."""

    FREE = 0
    OCCUPIED = 1
    RESERVED = 2


@dataclass
class ParkSlot:
    """One parking slot: its id, state, the car in it and when it got there."""

    park_id: int
    state: SlotState = SlotState.FREE
    car_num: str = ""
    time: int = 0

    def clear(self) -> None:
        """Free the slot."""
        self.state = SlotState.FREE
        self.car_num = ""
        self.time = 0

    def occupy(self, car_num: str, time: int) -> None:
        """Mark the slot as taken by ``car_num`` from ``time`` on."""
        self.state = SlotState.OCCUPIED
        self.car_num = car_num
        self.time = time

    def reserve(self, car_num: str, time: int) -> None:
        """Mark the slot as reserved for ``car_num`` at ``time``."""
        self.state = SlotState.RESERVED
        self.car_num = car_num
        self.time = time


@dataclass
class ParkRecord:
    """A finished stay: who parked where, when, what it cost and if it is paid."""

    car_num: str
    park_id: int
    parking_time: int
    out_time: int
    cost: float
    paid: bool = False


def empty_slots(count: int = PARK_MAX_NUMBER) -> list[ParkSlot]:
    """Return ``count`` free slots numbered from 1."""
    return [ParkSlot(park_id) for park_id in range(1, count + 1)]