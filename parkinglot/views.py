"""Display helpers: formatting slots and records for tables, and input checks."""

from __future__ import annotations

import time as _time
from collections.abc import Iterable

from .lot import ParkingLot
from .models import PARK_MAX_NUMBER, ParkingError, ParkRecord, ParkSlot, SlotState

_STATE_LABELS = {
    SlotState.FREE: "空闲",
    SlotState.OCCUPIED: "占用",
    SlotState.RESERVED: "预约",
}


def format_time(timestamp: int) -> str:
    """Local time as ``YYYY-MM-DD HH:MM:SS``; an empty string for 0."""
    if timestamp == 0:
        return ""
    return _time.strftime("%Y-%m-%d %H:%M:%S", _time.localtime(timestamp))


def is_valid_integer(text: str | None) -> bool:
    """True if ``text`` is a non-empty string of ASCII digits."""
    return bool(text) and all(ch in "0123456789" for ch in text)


def parse_slot_id(text: str | None) -> int:
    """Parse a slot number typed by the user, raising ParkingError if unusable."""
    if not is_valid_integer(text):
        raise ParkingError("请输入有效车位号")
    park_id = int(text)
    if not 1 <= park_id <= PARK_MAX_NUMBER:
        raise ParkingError("车位号无效")
    return park_id


def status_rows(slots: Iterable[ParkSlot]) -> list[tuple[str, str, str, str]]:
    """Rows for the slot table: id, state, plate and time."""
    return [
        (
            f"{slot.park_id:03d}",
            _STATE_LABELS.get(slot.state, "未知"),
            "" if slot.state == SlotState.FREE else slot.car_num,
            format_time(slot.time),
        )
        for slot in slots
    ]


def log_rows(records: Iterable[ParkRecord]) -> list[tuple[str, str, str, str, str, str]]:
    """Rows for the log table: plate, slot, times, cost and payment state."""
    return [
        (
            record.car_num,
            f"{record.park_id:03d}",
            format_time(record.parking_time),
            format_time(record.out_time),
            f"{record.cost:.2f}",
            "已支付" if record.paid else "未支付",
        )
        for record in records
    ]


def remaining_count(slots: Iterable[ParkSlot]) -> int:
    """Number of free slots."""
    return sum(1 for slot in slots if slot.state == SlotState.FREE)


def settlement_report(lot: ParkingLot) -> str:
    """Daily, monthly and yearly settlement reports, separated by blank lines."""
    return "\n\n".join(
        settlement.report() for settlement in (lot.settle_day(), lot.settle_month(), lot.settle_year())
    )


def timestamp_from_fields(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    """Seconds since the epoch for a local date and time; out-of-range fields roll over."""
    return int(_time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))