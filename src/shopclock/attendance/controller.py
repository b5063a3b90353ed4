from __future__ import annotations

from flask import Flask, jsonify

from ..attendance.codec import record_to_dict, staff_to_dict
from ..common.http import day_value, json_body, optional_instant
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    staff_service = container.staff_service
    attendance = container.attendance_service

    def _record_view(staff_id: str, record):
        data = record_to_dict(record)
        data["isOnBreak"] = record.is_on_break
        data["totalSecondsWorked"] = record.total_seconds_worked
        data["state"] = attendance.state_of(staff_id, record.work_date).value
        return data

    @app.route("/api/staff", methods=["GET"], endpoint="staff_list")
    def staff_list():
        return jsonify([staff_to_dict(s) for s in staff_service.list_staff()])

    @app.route("/api/staff", methods=["POST"], endpoint="staff_add")
    def staff_add():
        staff = staff_service.add_staff(str(json_body().get("name", "")))
        return jsonify(staff_to_dict(staff)), 201

    @app.route("/api/staff/<staff_id>", methods=["PATCH"], endpoint="staff_update")
    def staff_update(staff_id: str):
        data = json_body()
        staff = staff_service.get(staff_id)
        if "name" in data:
            staff = staff_service.rename(staff_id, str(data["name"]))
        if "hourlyWageYen" in data:
            staff = staff_service.set_hourly_wage(staff_id, data["hourlyWageYen"])
        if "mealAllowanceYen" in data:
            staff = staff_service.set_meal_allowance(staff_id, data["mealAllowanceYen"])
        return jsonify(staff_to_dict(staff))

    @app.route("/api/staff/<staff_id>", methods=["DELETE"], endpoint="staff_remove")
    def staff_remove(staff_id: str):
        staff_service.remove(staff_id)
        return "", 204

    @app.route("/api/staff/<staff_id>/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today(staff_id: str):
        staff_service.get(staff_id)
        return jsonify(_record_view(staff_id, attendance.record_for(staff_id)))

    actions = {
        "clock-in": attendance.clock_in,
        "clock-out": attendance.clock_out,
        "break-start": attendance.start_break,
        "break-end": attendance.end_break,
        "meal": attendance.add_meal,
    }

    @app.route("/api/staff/<staff_id>/<action>", methods=["POST"], endpoint="attendance_action")
    def attendance_action(staff_id: str, action: str):
        handler = actions.get(action)
        if handler is None:
            return jsonify({"error": f"Unknown action: {action}"}), 404
        return jsonify(_record_view(staff_id, handler(staff_id)))

    @app.route("/api/staff/<staff_id>/records/<day>", methods=["PUT"], endpoint="attendance_edit")
    def attendance_edit(staff_id: str, day: str):
        data = json_body()
        try:
            break_minutes = int(data.get("breakMinutes") or 0)
            meal_count = None if data.get("mealCount") is None else int(data["mealCount"])
        except (TypeError, ValueError):
            raise ValidationError("breakMinutes and mealCount must be whole numbers")

        record = attendance.update_record(
            staff_id,
            day_value(day),
            clock_in=optional_instant(data, "clockIn"),
            clock_out=optional_instant(data, "clockOut"),
            break_minutes=break_minutes,
            meal_count=meal_count,
        )
        return jsonify(_record_view(staff_id, record))
