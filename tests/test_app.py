import pytest

from parkinglot.app import ParkingController, ParkingWindow
from parkinglot.lot import ParkingLot
from parkinglot.models import ParkingError, SlotState
from parkinglot.views import settlement_report, timestamp_from_fields


@pytest.fixture
def controller(tmp_path):
    start = timestamp_from_fields(2024, 6, 15, 8, 0, 0)
    return ParkingController(ParkingLot(tmp_path / "status.csv", tmp_path / "log.csv", now=start))


def test_park_occupies_slot(controller):
    message = controller.park("5", "TEST-A")
    assert "停车成功" in message
    slot = controller.lot.slots[4]
    assert slot.state == SlotState.OCCUPIED
    assert slot.car_num == "TEST-A"


@pytest.mark.parametrize("text", ["abc", "", "0", "101"])
def test_bad_slot_text_rejected(controller, text):
    with pytest.raises(ParkingError):
        controller.park(text, "TEST-A")
    assert all(slot.state == SlotState.FREE for slot in controller.lot.slots)


def test_reserve_then_park_same_slot(controller):
    controller.reserve("3", "TEST-B")
    assert controller.lot.slots[2].state == SlotState.RESERVED
    with pytest.raises(ParkingError):
        controller.reserve("4", "TEST-B")


def test_leave_query_and_pay(controller):
    controller.park("1", "TEST-C")
    controller.set_time(2024, 6, 15, 9, 0, 0)
    assert "一路顺风" in controller.leave("1", "TEST-C")
    assert controller.query("TEST-C") == "车牌号 TEST-C 未支付总费用：¥0.00"
    assert "缴费成功" in controller.pay("TEST-C")
    with pytest.raises(ParkingError):
        controller.query("TEST-C")


def test_leave_with_wrong_car(controller):
    controller.park("2", "TEST-D")
    with pytest.raises(ParkingError, match="信息不匹配"):
        controller.leave("2", "TEST-E")


def test_set_time_message_and_clock(controller):
    message = controller.set_time(2024, 1, 2, 3, 4, 5)
    assert message == "系统时间已更新为 2024-01-02 03:04:05"
    assert controller.lot.now == timestamp_from_fields(2024, 1, 2, 3, 4, 5)


def test_settle_all_matches_report(controller):
    controller.park("1", "TEST-F")
    controller.set_time(2024, 6, 15, 20, 0, 0)
    controller.leave("1", "TEST-F")
    assert controller.settle_all() == settlement_report(controller.lot)


def test_window_refresh_without_display(controller):
    window = ParkingWindow(controller)
    controller.park("10", "TEST-G")
    rows = window.refresh_status()
    assert len(rows) == len(controller.lot.slots)
    assert rows[9][1:3] == ("占用", "TEST-G")
    assert window.remaining_text == f"剩余车位：{len(controller.lot.slots) - 1}"


def test_window_refresh_log(controller):
    window = ParkingWindow(controller)
    assert window.refresh_log() == []
    controller.park("1", "TEST-H")
    controller.leave("1", "TEST-H")
    rows = window.refresh_log()
    assert [row[0] for row in rows] == ["TEST-H"]
    assert rows[0][5] == "未支付"