"""Reading and writing slot states and the leave log as comma-separated files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from .models import PARK_MAX_NUMBER, ParkRecord, ParkSlot, SlotState, empty_slots

logger = logging.getLogger(__name__)


def _int_field(text: str, name: str, line_no: int) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"line {line_no}: invalid {name} {text!r}") from None


def load_slots(path: str | os.PathLike[str]) -> list[ParkSlot]:
    """Load slot states from ``path``; slots not named in the file stay free."""
    count = PARK_MAX_NUMBER
    slots = empty_slots(count)
    with open(path, encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            fields = line.rstrip("\n").split(",")
            if len(fields) < 4:
                raise ValueError(f"line {line_no}: expected 4 fields, got {len(fields)}")
            park_id = _int_field(fields[0], "slot id", line_no)
            status = _int_field(fields[1], "status", line_no)
            time = _int_field(fields[3], "time", line_no)
            if not 1 <= park_id <= count:
                raise ValueError(f"line {line_no}: slot id {park_id} out of range")
            try:
                state = SlotState(status)
            except ValueError:
                raise ValueError(f"line {line_no}: unknown status {status}") from None
            slot = slots[park_id - 1]
            slot.state = state
            slot.car_num = fields[2]
            slot.time = time
    logger.info("Loaded slot states from %s", path)
    return slots


def save_slots(path: str | os.PathLike[str], slots: Iterable[ParkSlot]) -> None:
    """Write every slot to ``path``, one line per slot."""
    with open(path, "w", encoding="utf-8") as handle:
        for slot in slots:
            handle.write(f"{slot.park_id},{int(slot.state)},{slot.car_num},{slot.time}\n")
    logger.info("Saved slot states to %s", path)


def load_log(path: str | os.PathLike[str]) -> list[ParkRecord]:
    """Load the leave log from ``path`` in file order."""
    records = []
    with open(path, encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            fields = line.rstrip("\n").split(",")
            if len(fields) < 5:
                raise ValueError(f"line {line_no}: expected at least 5 fields, got {len(fields)}")
            try:
                cost = float(fields[4])
            except ValueError:
                raise ValueError(f"line {line_no}: invalid cost {fields[4]!r}") from None
            records.append(
                ParkRecord(
                    car_num=fields[0],
                    park_id=_int_field(fields[1], "slot id", line_no),
                    parking_time=_int_field(fields[2], "parking time", line_no),
                    out_time=_int_field(fields[3], "leave time", line_no),
                    cost=cost,
                    paid=len(fields) > 5 and fields[5] == "1",
                )
            )
    logger.info("Loaded leave log from %s", path)
    return records


def save_log(path: str | os.PathLike[str], records: Iterable[ParkRecord]) -> None:
    """Write the leave log to ``path``, one line per record."""
    with open(path, "w", encoding="utf-8") as handle:
        for record in records:
            handle.write(
                f"{record.car_num},{record.park_id},{record.parking_time},"
                f"{record.out_time},{record.cost:g},{'1' if record.paid else '0'}\n"
            )
    logger.info("Saved leave log to %s", path)