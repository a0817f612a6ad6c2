"""Desktop window for the parking lot and the controller behind its buttons."""

from __future__ import annotations

import time as _time

from .lot import ParkingLot
from .models import ParkingError
from .views import (
    log_rows,
    parse_slot_id,
    remaining_count,
    settlement_report,
    status_rows,
    timestamp_from_fields,
)


class ParkingController:
    """Turns raw user input into parking lot operations.

    Each action returns a message; refused actions raise ParkingError.
    """

    def __init__(self, lot: ParkingLot) -> None:
        self.lot = lot

    def park(self, slot_text: str, car_num: str) -> str:
        return self.lot.park_car(car_num, parse_slot_id(slot_text))

    def reserve(self, slot_text: str, car_num: str) -> str:
        return self.lot.reserve(car_num, parse_slot_id(slot_text))

    def leave(self, slot_text: str, car_num: str) -> str:
        return self.lot.car_leave(car_num, parse_slot_id(slot_text))

    def query(self, car_num: str) -> str:
        return self.lot.query_fee(car_num)

    def pay(self, car_num: str) -> str:
        return self.lot.pay_fee(car_num)

    def settle_all(self) -> str:
        return settlement_report(self.lot)

    def set_time(self, year: int, month: int, day: int, hour: int, minute: int, second: int) -> str:
        year, month, day, hour, minute, second = map(int, (year, month, day, hour, minute, second))
        self.lot.set_time(timestamp_from_fields(year, month, day, hour, minute, second))
        return f"系统时间已更新为 {year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"


class ParkingWindow:
    """Tabbed window showing slots, the leave log and admin tools."""

    def __init__(self, controller: ParkingController) -> None:
        self.controller = controller
        self.remaining_text = "剩余车位：--"
        self._root = None
        self._status_tree = None
        self._log_tree = None
        self._remaining_label = None

    def refresh_status(self) -> list[tuple[str, str, str, str]]:
        """Recompute the slot table and free count, updating the widgets if shown."""
        slots = self.controller.lot.slots
        rows = status_rows(slots)
        self.remaining_text = f"剩余车位：{remaining_count(slots)}"
        if self._status_tree is not None:
            self._status_tree.delete(*self._status_tree.get_children())
            for row in rows:
                self._status_tree.insert("", "end", values=row)
            self._remaining_label.configure(text=self.remaining_text)
        return rows

    def refresh_log(self) -> list[tuple[str, str, str, str, str, str]]:
        """Recompute the log table, updating the widget if shown."""
        rows = log_rows(self.controller.lot.records)
        if self._log_tree is not None:
            self._log_tree.delete(*self._log_tree.get_children())
            for row in rows:
                self._log_tree.insert("", "end", values=row)
        return rows

    def run(self) -> None:
        """Build the window and enter the event loop."""
        import tkinter as tk
        from tkinter import messagebox, ttk

        root = tk.Tk()
        root.title("停车管理系统")
        root.geometry("1000x600")
        self._root = root

        notebook = ttk.Notebook(root)
        notebook.pack(fill="both", expand=True)

        def make_table(parent, headings):
            frame = ttk.Frame(parent)
            tree = ttk.Treeview(frame, columns=list(range(len(headings))), show="headings")
            for index, heading in enumerate(headings):
                tree.heading(index, text=heading)
            scroll = ttk.Scrollbar(frame, orient="vertical", command=tree.yview)
            tree.configure(yscrollcommand=scroll.set)
            tree.pack(side="left", fill="both", expand=True)
            scroll.pack(side="right", fill="y")
            frame.pack(fill="both", expand=True, padx=5, pady=5)
            return tree

        def run_action(action, *refreshers):
            try:
                message = action()
            except ParkingError as exc:
                messagebox.showwarning(parent=root, message=str(exc))
            else:
                messagebox.showinfo(parent=root, message=message)
            finally:
                for refresh in refreshers:
                    refresh()

        # Slot status page
        status_page = ttk.Frame(notebook)
        notebook.add(status_page, text="车位状态")
        self._status_tree = make_table(status_page, ["车位ID", "状态", "车牌号", "时间"])
        controls = ttk.Frame(status_page)
        controls.pack(fill="x", padx=5, pady=5)
        slot_entry = ttk.Entry(controls)
        car_entry = ttk.Entry(controls)
        slot_entry.pack(side="left", padx=5)
        car_entry.pack(side="left", padx=5)
        ttk.Button(
            controls,
            text="停车",
            command=lambda: run_action(
                lambda: self.controller.park(slot_entry.get(), car_entry.get()), self.refresh_status
            ),
        ).pack(side="left", padx=5)
        ttk.Button(
            controls,
            text="预约",
            command=lambda: run_action(
                lambda: self.controller.reserve(slot_entry.get(), car_entry.get()), self.refresh_status
            ),
        ).pack(side="left", padx=5)
        ttk.Button(
            controls,
            text="驶离",
            command=lambda: run_action(
                lambda: self.controller.leave(slot_entry.get(), car_entry.get()),
                self.refresh_status,
                self.refresh_log,
            ),
        ).pack(side="left", padx=5)
        self._remaining_label = ttk.Label(controls, text=self.remaining_text)
        self._remaining_label.pack(side="right", padx=5)

        # Log page
        log_page = ttk.Frame(notebook)
        notebook.add(log_page, text="日志信息")
        self._log_tree = make_table(log_page, ["车牌号", "车位号", "进入时间", "离开时间", "费用", "支付状态"])
        query_box = ttk.Frame(log_page)
        query_box.pack(fill="x", padx=5, pady=5)
        query_entry = ttk.Entry(query_box)
        query_entry.pack(side="left", padx=5)

        def on_query():
            car_num = query_entry.get()
            try:
                message = self.controller.query(car_num)
            except ParkingError as exc:
                messagebox.showwarning(parent=root, message=str(exc))
                return
            if messagebox.askyesno(parent=root, title="缴费", message=message):
                run_action(lambda: self.controller.pay(car_num), self.refresh_log)

        ttk.Button(query_box, text="查询费用/缴费", command=on_query).pack(side="left", padx=5)

        # Admin page
        admin_page = ttk.Frame(notebook)
        notebook.add(admin_page, text="管理页面")
        ttk.Button(
            admin_page,
            text="结算收益",
            command=lambda: messagebox.showinfo(parent=root, message=self.controller.settle_all()),
        ).pack(anchor="w", padx=5, pady=5)

        now = _time.localtime()
        grid = ttk.Frame(admin_page)
        grid.pack(anchor="w", padx=5, pady=5)
        ranges = [
            (range(2020, 2031), now.tm_year),
            (range(1, 13), now.tm_mon),
            (range(1, 32), now.tm_mday),
            (range(0, 24), now.tm_hour),
            (range(0, 60), now.tm_min),
            (range(0, 60), now.tm_sec),
        ]
        combos = []
        for position, (values, current) in enumerate(ranges):
            combo = ttk.Combobox(grid, values=[str(v) for v in values], state="readonly", width=6)
            if current in values:
                combo.set(str(current))
            combo.grid(row=position // 3, column=position % 3, padx=2, pady=2)
            combos.append(combo)

        def on_set_time():
            try:
                fields = [int(combo.get()) for combo in combos]
            except ValueError:
                messagebox.showerror(parent=root, message="请选择完整的时间")
                return
            run_action(lambda: self.controller.set_time(*fields), self.refresh_status, self.refresh_log)

        ttk.Button(admin_page, text="修改系统时间", command=on_set_time).pack(anchor="w", padx=5, pady=5)

        self.refresh_status()
        self.refresh_log()
        root.mainloop()


def main(argv: list[str] | None = None) -> int:
    """Start the parking lot window with the default data files."""
    window = ParkingWindow(ParkingController(ParkingLot()))
    window.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())