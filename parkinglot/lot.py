"""Parking lot operations: parking, leaving, reservations, fees and settlement."""

from __future__ import annotations

import logging
import os
import time as _time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from .models import (
    PARK_LOG_FILE_NAME,
    PARK_MAX_NUMBER,
    PARK_STATUS_FILE_NAME,
    ParkingError,
    ParkRecord,
    ParkSlot,
    SlotState,
    empty_slots,
)
from .storage import load_log, load_slots, save_log, save_slots

logger = logging.getLogger(__name__)

FREE_SECONDS = 7200
BASE_FEE = 5.0
HOURLY_FEE = 3.0
MAX_FEE = 30.0


def parking_fee(start_time: int, end_time: int) -> float:
    """Fee for a stay: free up to two hours, then 5 plus 3 per extra hour, capped at 30."""
    duration = end_time - start_time
    if duration <= FREE_SECONDS:
        return 0.0
    hours = duration // 3600
    return min(BASE_FEE + (hours - 2) * HOURLY_FEE, MAX_FEE)


@dataclass(frozen=True)
class Settlement:
    """Income over one period, split into paid and unpaid."""

    period: str
    total: float
    paid: float
    unpaid: float

    def report(self) -> str:
        """Human-readable summary of the settlement."""
        return (
            f"【{self.period}结算】\n"
            f"总收入: {self.total:.2f} 元\n"
            f"已支付: {self.paid:.2f} 元\n"
            f"未支付: {self.unpaid:.2f} 元"
        )


class ParkingLot:
    """A parking lot backed by a slot-state file and a leave-log file.

    Successful operations return a message; refused ones raise ParkingError.
    """

    def __init__(
        self,
        status_file: str | os.PathLike[str] = PARK_STATUS_FILE_NAME,
        log_file: str | os.PathLike[str] = PARK_LOG_FILE_NAME,
        now: int | None = None,
    ) -> None:
        self.status_file = status_file
        self.log_file = log_file
        self.now = int(_time.time()) if now is None else int(now)
        self.slots: list[ParkSlot] = self._load(lambda: load_slots(status_file), empty_slots, status_file)
        self.records: list[ParkRecord] = self._load(lambda: load_log(log_file), list, log_file)

    @staticmethod
    def _load(loader: Callable, default: Callable, path) -> list:
        try:
            return loader()
        except OSError as exc:
            logger.error("Cannot open %s: %s", path, exc)
            return default()

    def _save_slots(self) -> None:
        try:
            save_slots(self.status_file, self.slots)
        except OSError as exc:
            logger.error("Cannot write %s: %s", self.status_file, exc)

    def _save_log(self) -> None:
        try:
            save_log(self.log_file, self.records)
        except OSError as exc:
            logger.error("Cannot write %s: %s", self.log_file, exc)

    def _slot(self, park_id: int) -> ParkSlot:
        if not 1 <= park_id <= len(self.slots):
            raise ParkingError("车位号无效")
        return self.slots[park_id - 1]

    def _locate(self, car_num: str) -> tuple[int, ParkSlot] | None:
        """Index and slot where ``car_num`` is parked or reserved, if anywhere."""
        return next(
            (
                (index, slot)
                for index, slot in enumerate(self.slots)
                if slot.car_num == car_num and slot.state in (SlotState.OCCUPIED, SlotState.RESERVED)
            ),
            None,
        )

    def park_car(self, car_num: str, park_id: int) -> str:
        """Park ``car_num`` in slot ``park_id``."""
        slot = self._slot(park_id)
        found = self._locate(car_num)
        if found is not None:
            index, existing = found
            if existing.state is SlotState.OCCUPIED:
                raise ParkingError("车牌号已存在，请检查输入！")
            slot.occupy(car_num, self.now)
            self._save_slots()
            raise ParkingError(f"该车牌号已在{index + 1}号车位预约，请停至对应车位，不要占用其他车位！")
        if slot.state is SlotState.FREE:
            slot.occupy(car_num, self.now)
            self._save_slots()
            return f"车牌号：{car_num} 停车成功！"
        raise ParkingError("车位已被占用或预约，请选择其他车位！")

    def car_leave(self, car_num: str, park_id: int) -> str:
        """Let ``car_num`` leave slot ``park_id`` and log the stay with its fee."""
        slot = self._slot(park_id)
        if slot.state is not SlotState.OCCUPIED or slot.car_num != car_num:
            raise ParkingError("信息不匹配，请检查输入！")
        self.records.append(
            ParkRecord(
                car_num=car_num,
                park_id=park_id,
                parking_time=slot.time,
                out_time=self.now,
                cost=parking_fee(slot.time, self.now),
                paid=False,
            )
        )
        slot.clear()
        self._save_slots()
        self._save_log()
        return f"车牌号：{car_num} 一路顺风！"

    def reserve(self, car_num: str, park_id: int) -> str:
        """Reserve slot ``park_id`` for ``car_num``."""
        slot = self._slot(park_id)
        found = self._locate(car_num)
        if found is not None:
            index, existing = found
            if existing.state is SlotState.OCCUPIED:
                raise ParkingError("车牌号已存在，请检查输入！")
            raise ParkingError(f"该车牌号已在{index + 1}号车位预约，请勿重复预约")
        slot.reserve(car_num, self.now)
        self._save_slots()
        return f"车牌号：{car_num} 预约车位：{park_id}成功！"

    def _unpaid(self, car_num: str) -> list[ParkRecord]:
        return [record for record in self.records if record.car_num == car_num and not record.paid]

    def query_fee(self, car_num: str) -> str:
        """Describe the total unpaid fees of ``car_num``."""
        unpaid = self._unpaid(car_num)
        if not unpaid:
            raise ParkingError("未查询到该车牌的未支付记录。")
        total = sum(record.cost for record in unpaid)
        return f"车牌号 {car_num} 未支付总费用：¥{total:.2f}"

    def pay_fee(self, car_num: str) -> str:
        """Mark every unpaid record of ``car_num`` as paid."""
        unpaid = self._unpaid(car_num)
        if not unpaid:
            raise ParkingError("没有找到未支付的记录。")
        for record in unpaid:
            record.paid = True
        self._save_log()
        return f"车牌号 {car_num} 缴费成功！"

    def _settle(self, period: str, start: float, end: float) -> Settlement:
        selected: Iterable[ParkRecord] = [r for r in self.records if start <= r.out_time < end]
        paid = sum(r.cost for r in selected if r.paid)
        unpaid = sum(r.cost for r in selected if not r.paid)
        return Settlement(period, paid + unpaid, paid, unpaid)

    def _midnight(self) -> datetime:
        return datetime.fromtimestamp(self.now).replace(hour=0, minute=0, second=0, microsecond=0)

    def settle_day(self) -> Settlement:
        """Income from stays that ended on the current day."""
        start = self._midnight().timestamp()
        return self._settle("日", start, start + 24 * 3600)

    def settle_month(self) -> Settlement:
        """Income from stays that ended in the current month."""
        start = self._midnight().replace(day=1)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return self._settle("月", start.timestamp(), end.timestamp())

    def settle_year(self) -> Settlement:
        """Income from stays that ended in the current year."""
        start = self._midnight().replace(month=1, day=1)
        end = start.replace(year=start.year + 1)
        return self._settle("年", start.timestamp(), end.timestamp())

    def set_time(self, timestamp: int) -> None:
        """Set the lot's clock, in seconds since the epoch."""
        self.now = int(timestamp)


__all__ = ["ParkingLot", "Settlement", "parking_fee", "PARK_MAX_NUMBER"]