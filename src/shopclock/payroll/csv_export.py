"""Monthly payroll CSV (spreadsheet compatible).

Layout: one header row, then four rows per staff member (clock-in, clock-out, meals, worked
hours). Summary values only appear on the worked-hours row.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from ..common.datetime_utils import DayLike, days_in_month, format_hhmm, month_range
from ..core.enums import RoundingMode
from ..staff.model import Staff
from .service import PayrollService

SUMMARY_COLUMNS = ["時給", "賄い単価", "勤務日数", "労働時間（合計）", "賄い回数", "支給額"]


def _hours(value: float) -> str:
    return f"{value:.2f}"


def build_monthly_rows(
    payroll: PayrollService,
    staff: Iterable[Staff],
    month: DayLike,
    mode: RoundingMode | str,
) -> list[list[str]]:
    start, _ = month_range(month)
    days = days_in_month(start)
    month_label = start.strftime("%Y年%m月")
    blank_summary = [""] * len(SUMMARY_COLUMNS)

    rows: list[list[str]] = [[month_label, "打刻", "日付"] + [str(d) for d in range(1, days + 1)] + SUMMARY_COLUMNS]

    for s in staff:
        by_day = {r.work_date.day: r for r in payroll.monthly_daily_records(s.id, start)}
        line = payroll.payroll_line(s, start, mode)

        clock_in_row = [s.name, "出勤", "日付"]
        clock_out_row = ["", "退勤", "日付"]
        meal_row = ["", "賄い", "日付"]
        hours_row = ["", "労働時間", "日付"]

        for day in range(1, days + 1):
            r = by_day.get(day)
            clock_in_row.append(format_hhmm(r.clock_in) if r else "")
            clock_out_row.append(format_hhmm(r.clock_out) if r else "")
            meal_row.append(str(r.meal_count) if r and r.meal_count > 0 else "")
            hours = payroll.daily_hours(r, mode) if r else None
            hours_row.append(_hours(hours) if hours is not None else "")

        hours_row += [
            str(line.hourly_wage),
            str(line.meal_unit),
            str(line.work_days),
            _hours(line.total_hours),
            str(line.meal_count),
            str(line.pay),
        ]
        rows += [clock_in_row + blank_summary, clock_out_row + blank_summary, meal_row + blank_summary, hours_row]

    return rows


def render_monthly_csv(
    payroll: PayrollService,
    staff: Iterable[Staff],
    month: DayLike,
    mode: RoundingMode | str,
) -> bytes:
    """UTF-8 with BOM; fields holding a comma, quote or newline are quoted."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerows(build_monthly_rows(payroll, staff, month, mode))
    return out.getvalue().rstrip("\n").encode("utf-8-sig")
