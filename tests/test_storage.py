import pytest

from parkinglot.models import PARK_MAX_NUMBER, ParkRecord, SlotState, empty_slots
from parkinglot.storage import load_log, load_slots, save_log, save_slots


@pytest.fixture
def status_file(tmp_path):
    return tmp_path / "parkStatus.csv"


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "log.csv"


def test_slots_round_trip(status_file):
    slots = empty_slots()
    slots[1].occupy("TEST-001", 1000)
    slots[4].reserve("测试-002", 2000)
    save_slots(status_file, slots)
    assert load_slots(status_file) == slots


def test_save_slots_line_format(status_file):
    slots = empty_slots(2)
    slots[1].occupy("TEST-001", 1000)
    save_slots(status_file, slots)
    lines = status_file.read_text(encoding="utf-8").splitlines()
    assert lines == ["1,0,,0", "2,1,TEST-001,1000"]


def test_load_slots_fills_unlisted_slots(status_file):
    status_file.write_text("3,1,TEST-009,50\n", encoding="utf-8")
    slots = load_slots(status_file)
    assert len(slots) == PARK_MAX_NUMBER
    assert slots[2].state is SlotState.OCCUPIED
    assert slots[2].car_num == "TEST-009"
    assert slots[2].time == 50
    others = slots[:2] + slots[3:]
    assert all(slot.state is SlotState.FREE and slot.car_num == "" for slot in others)


def test_load_slots_empty_file(status_file):
    status_file.write_text("", encoding="utf-8")
    assert load_slots(status_file) == empty_slots()


def test_load_slots_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_slots(tmp_path / "missing.csv")


def test_load_slots_bad_number(status_file):
    status_file.write_text("1,x,,0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_slots(status_file)


def test_load_slots_too_few_fields(status_file):
    status_file.write_text("1,0,TEST-001\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_slots(status_file)


def test_load_slots_id_out_of_range(status_file):
    status_file.write_text(f"{PARK_MAX_NUMBER + 1},0,,0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_slots(status_file)


def test_log_round_trip(log_file):
    records = [
        ParkRecord("TEST-001", 3, 100, 8000, 5.0, False),
        ParkRecord("测试-002", 12, 200, 90000, 30.0, True),
        ParkRecord("TEST-001", 1, 300, 400, 0.0, False),
    ]
    save_log(log_file, records)
    assert load_log(log_file) == records


def test_save_log_line_format(log_file):
    save_log(log_file, [ParkRecord("TEST-001", 3, 100, 8000, 5.0, False)])
    assert log_file.read_text(encoding="utf-8") == "TEST-001,3,100,8000,5,0\n"


def test_load_log_paid_flag(log_file):
    log_file.write_text("TEST-001,1,10,20,8,1\nTEST-002,2,10,20,8,0\n", encoding="utf-8")
    records = load_log(log_file)
    assert [record.paid for record in records] == [True, False]
    assert [record.car_num for record in records] == ["TEST-001", "TEST-002"]


def test_load_log_missing_paid_field_means_unpaid(log_file):
    log_file.write_text("TEST-001,1,10,20,8\n", encoding="utf-8")
    (record,) = load_log(log_file)
    assert record.paid is False
    assert record.cost == 8.0


def test_load_log_empty_file(log_file):
    log_file.write_text("", encoding="utf-8")
    assert load_log(log_file) == []


def test_load_log_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_log(tmp_path / "missing.csv")


def test_load_log_bad_cost(log_file):
    log_file.write_text("TEST-001,1,10,20,abc,0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_log(log_file)


def test_save_log_empty_writes_empty_file(log_file):
    save_log(log_file, [])
    assert log_file.read_text(encoding="utf-8") == ""
    assert load_log(log_file) == []