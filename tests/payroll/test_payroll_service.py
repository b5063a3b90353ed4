from datetime import date, datetime, time

from shopclock.core.enums import RoundingMode
from shopclock.payroll.service import pay_amount


def _work(attendance, staff_id, day, start, end, *, break_minutes=0, meals=0):
    return attendance.update_record(
        staff_id,
        day,
        clock_in=datetime.combine(day, start),
        clock_out=datetime.combine(day, end),
        break_minutes=break_minutes,
        meal_count=meals,
    )


def test_end_to_end_alice_month(attendance, payroll, alice):
    r = _work(attendance, alice.id, date(2026, 1, 5), time(9, 0), time(18, 0), break_minutes=60, meals=1)
    assert r.total_seconds_worked == 8 * 3600

    hours = payroll.monthly_total_hours(alice.id, date(2026, 1, 1), RoundingMode.MINUTE1)
    meals = payroll.monthly_meal_count(alice.id, date(2026, 1, 1))
    assert hours == 8.0
    assert meals == 1
    assert pay_amount(hours, alice.hourly_wage, alice.meal_allowance, meals) == 9100

    line = payroll.payroll_line(alice, datetime(2026, 1, 20, 12, 0), RoundingMode.MINUTE1)
    assert (line.total_hours, line.meal_count, line.work_days, line.pay) == (8.0, 1, 1, 9100)


def test_month_range_is_calendar_based(attendance, payroll, alice):
    _work(attendance, alice.id, date(2025, 12, 31), time(9, 0), time(10, 0))
    _work(attendance, alice.id, date(2026, 1, 1), time(9, 0), time(11, 0))
    _work(attendance, alice.id, date(2026, 1, 31), time(9, 0), time(12, 0))
    _work(attendance, alice.id, date(2026, 2, 1), time(9, 0), time(13, 0))

    assert payroll.monthly_total_hours(alice.id, date(2026, 1, 15), "minute1") == 5.0
    assert [r.work_date for r in payroll.monthly_daily_records(alice.id, date(2026, 1, 15))] == [
        date(2026, 1, 1),
        date(2026, 1, 31),
    ]
    assert payroll.monthly_total_hours(alice.id, date(2026, 2, 1), "minute1") == 4.0


def test_daily_records_sorted_and_open_days_skipped(attendance, payroll, alice, clock):
    _work(attendance, alice.id, date(2026, 1, 20), time(9, 0), time(10, 0))
    _work(attendance, alice.id, date(2026, 1, 3), time(9, 0), time(10, 0))
    attendance.clock_in(alice.id)

    days = [r.work_date for r in payroll.monthly_daily_records(alice.id, date(2026, 1, 1))]
    assert days == [date(2026, 1, 3), date(2026, 1, 5), date(2026, 1, 20)]
    assert payroll.monthly_total_hours(alice.id, date(2026, 1, 1), "minute1") == 2.0
    assert payroll.monthly_work_days(alice.id, date(2026, 1, 1)) == 2


def test_quarter_rounding_applies_per_day(attendance, payroll, alice):
    _work(attendance, alice.id, date(2026, 1, 6), time(9, 0), time(9, 8))
    _work(attendance, alice.id, date(2026, 1, 7), time(9, 0), time(9, 7))

    assert payroll.monthly_total_hours(alice.id, date(2026, 1, 1), RoundingMode.QUARTER15) == 0.25
    assert payroll.monthly_total_hours(alice.id, date(2026, 1, 1), RoundingMode.MINUTE1) == 15 / 60


def test_meal_count_ignores_other_staff(attendance, payroll, alice, staff_service):
    bob = staff_service.add_staff("Bob")
    attendance.add_meal(alice.id)
    attendance.add_meal(bob.id)
    attendance.add_meal(bob.id)

    assert payroll.monthly_meal_count(alice.id, date(2026, 1, 1)) == 1
    assert payroll.monthly_meal_count(bob.id, date(2026, 1, 1)) == 2


def test_aggregation_does_not_write(attendance, payroll, alice, kv):
    attendance.add_meal(alice.id)
    writes = kv.writes
    payroll.monthly_summary(date(2026, 1, 1), RoundingMode.QUARTER15)
    payroll.monthly_daily_records(alice.id, date(2026, 3, 1))
    assert kv.writes == writes


def test_pay_amount_rules():
    assert pay_amount(8.0, 1200, 500, 1) == 9100
    assert pay_amount(0.5, None, 300, 2) == -600
    assert pay_amount(1.0, 1001, None, 3) == 1001
    assert pay_amount(1.25, 1002, 0, 0) == 1253


def test_monthly_summary_covers_every_staff(payroll, staff_service, alice):
    staff_service.add_staff("Bob")
    lines = payroll.monthly_summary(date(2026, 1, 1), "minute1")

    assert [line.name for line in lines] == ["Alice", "Bob"]
    assert lines[1].hourly_wage == 0
    assert lines[1].pay == 0
