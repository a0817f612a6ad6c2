# parkinglot

A small parking-lot manager for a lot of 100 numbered slots. It parks cars,
reserves slots, lets cars leave, charges and collects parking fees, and
settles revenue by day, month and year. State is kept in two plain CSV files,
and a Tk desktop window drives everything.

## Installing

```
pip install .
```

The window uses the standard library's Tk toolkit (`tkinter`). Nothing else
is needed.

## Starting the window

```
parkinglot
```

The window has three tabs:

* **车位状态**: every slot with its state (空闲 free, 占用 occupied,
  预约 reserved), the plate number and the time it was taken, plus the number
  of free slots. Enter a slot number and a plate, then park (停车),
  reserve (预约) or leave (驶离).
* **日志信息**: every finished stay with its slot, arrival and departure
  times, fee and payment state. Enter a plate and press 查询费用/缴费 to see
  what it owes; confirm to pay it.
* **管理页面**: settle revenue for the current day, month and year, and set
  the system clock from year/month/day/hour/minute/second lists. Setting the
  clock makes it easy to try out fees and settlements.

State is read from `./data/parkStatus.csv` and `./data/log.csv` relative to
the working directory. If a file cannot be opened it is logged and the lot
starts empty; if it cannot be written (for example because `./data` does not
exist) the error is logged and the change is kept only in memory.

## Rules

* Slot numbers typed into the window must be plain digits from 1 to 100;
  anything else is rejected.
* A plate that is already parked cannot park or reserve again.
* A plate that already holds a reservation cannot reserve again. If it parks,
  the chosen slot is taken, but a `ParkingError` reminds the driver to use the
  reserved slot.
* Parking needs a free slot. Reserving does not check the slot's state.
* Leaving needs the slot to be occupied by that plate.
* The first two hours are free. After that a stay costs 5 plus 3 for each
  full hour past the second, and never more than 30.
* A fee is counted in settlements by the time the car left, and shows up as
  paid once the plate has paid.

## Using the library

```python
from parkinglot.lot import ParkingLot
from parkinglot.models import ParkingError

lot = ParkingLot("slots.csv", "log.csv", now=1_700_000_000)

lot.park_car("TEST-001", 12)
lot.set_time(1_700_000_000 + 4 * 3600)
lot.car_leave("TEST-001", 12)

print(lot.query_fee("TEST-001"))
lot.pay_fee("TEST-001")

print(lot.settle_day().report())

try:
    lot.car_leave("TEST-001", 12)
except ParkingError as err:
    print(err)
```

Each successful operation returns a message; refused requests raise
`ParkingError` with a message you can show to the user. Parking, reserving
and leaving rewrite the slot file; leaving and paying rewrite the log file.

`ParkingLot.settle_day`, `settle_month` and `settle_year` return a
`Settlement` with `total`, `paid` and `unpaid` amounts and a `report()` text.
`parking_fee(start_time, end_time)` computes a single fee.

Other modules:

* `parkinglot.models`: `ParkSlot`, `ParkRecord`, `SlotState`, `ParkingError`
  and `empty_slots`.
* `parkinglot.storage`: `load_slots`, `save_slots`, `load_log`, `save_log`
  read and write the two files on their own; malformed lines raise
  `ValueError`.
* `parkinglot.views`: the table rows and texts the window shows
  (`status_rows`, `log_rows`, `remaining_count`, `settlement_report`,
  `format_time`) and input helpers (`is_valid_integer`, `parse_slot_id`,
  `timestamp_from_fields`).
* `parkinglot.app`: `ParkingController`, which turns raw input into lot
  operations, `ParkingWindow`, and `main`.

## File formats

Slot file, one line per slot:

```
slot id,state (0 free, 1 occupied, 2 reserved),plate,unix time
```

Log file, one line per finished stay:

```
plate,slot id,arrival unix time,departure unix time,fee,paid (1 or 0)
```

## Running the tests

```
pip install ".[test]"
pytest
```