"""JSON encoding of staff and attendance records.

The same shapes are used for the per-namespace store blobs and for backup files:

- staff: ``{"id", "name", "hourlyWageYen", "mealAllowanceYen"}``
- record: ``{"id", "staffId", "date", "clockIn", "clockOut", "breakStart", "breakMinutes", "mealCount"}``

Instants are local ISO-8601 strings. Older payloads may carry numbers (seconds since
2001-01-01 UTC), which are accepted on decode.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import from_reference_seconds, parse_iso_date, to_day, to_local_naive
from ..staff.model import Staff
from .model import AttendanceRecord, Snapshot


def _encode_instant(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _decode_instant(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return from_reference_seconds(float(value))
        except OverflowError:
            raise ValueError(f"Instant out of range: {value!r}")
    if isinstance(value, str):
        return to_local_naive(datetime.fromisoformat(value))
    raise ValueError(f"Unsupported instant value: {value!r}")


def _decode_day(value: Any) -> date:
    if isinstance(value, str) and len(value) == 10:
        return parse_iso_date(value)
    instant = _decode_instant(value)
    if instant is None:
        raise ValueError("Record date is missing")
    return to_day(instant)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def staff_to_dict(staff: Staff) -> dict:
    return {
        "id": staff.id,
        "name": staff.name,
        "hourlyWageYen": staff.hourly_wage,
        "mealAllowanceYen": staff.meal_allowance,
    }


def staff_from_dict(data: Mapping[str, Any]) -> Staff:
    return Staff(
        id=str(data["id"]),
        name=str(data["name"]),
        hourly_wage=_optional_int(data.get("hourlyWageYen")),
        meal_allowance=_optional_int(data.get("mealAllowanceYen")),
    )


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "staffId": record.staff_id,
        "date": record.work_date.strftime("%Y-%m-%d"),
        "clockIn": _encode_instant(record.clock_in),
        "clockOut": _encode_instant(record.clock_out),
        "breakStart": _encode_instant(record.break_start),
        "breakMinutes": record.break_minutes,
        "mealCount": record.meal_count,
    }


def record_from_dict(data: Mapping[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(data["id"]),
        staff_id=str(data["staffId"]),
        work_date=_decode_day(data["date"]),
        clock_in=_decode_instant(data.get("clockIn")),
        clock_out=_decode_instant(data.get("clockOut")),
        break_start=_decode_instant(data.get("breakStart")),
        break_minutes=int(data["breakMinutes"]),
        meal_count=int(data.get("mealCount") or 0),
    )


def encode_staff_list(staff: list[Staff] | tuple[Staff, ...]) -> list[dict]:
    return [staff_to_dict(s) for s in staff]


def decode_staff_list(raw: Any) -> list[Staff]:
    if not isinstance(raw, list):
        raise ValueError("Staff payload must be a list")
    return [staff_from_dict(item) for item in raw]


def encode_records(records: Mapping[str, AttendanceRecord]) -> dict:
    return {key: record_to_dict(r) for key, r in records.items()}


def decode_records(raw: Any) -> dict[str, AttendanceRecord]:
    if not isinstance(raw, dict):
        raise ValueError("Records payload must be an object")
    return {str(key): record_from_dict(item) for key, item in raw.items()}


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    return {"staffs": encode_staff_list(snapshot.staff), "records": encode_records(snapshot.records)}


def snapshot_from_dict(raw: Any) -> Snapshot:
    if not isinstance(raw, dict):
        raise ValueError("Snapshot must be an object")
    return Snapshot(
        staff=tuple(decode_staff_list(raw.get("staffs"))),
        records=decode_records(raw.get("records")),
    )
