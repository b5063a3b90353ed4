from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..attendance.codec import record_to_dict
from ..common.http import month_arg, owner_required, rounding_arg
from ..container import Container
from .csv_export import render_monthly_csv


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service
    owner_only = owner_required(container.owner_auth_service)

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_summary")
    @owner_only
    def payroll_summary():
        month = month_arg()
        mode = rounding_arg()
        lines = payroll.monthly_summary(month, mode)
        return jsonify(
            {
                "month": month.strftime("%Y-%m"),
                "rounding": mode.value,
                "rounding_label": mode.label,
                "lines": [asdict(line) for line in lines],
            }
        )

    @app.route("/api/payroll.csv", methods=["GET"], endpoint="payroll_csv")
    @owner_only
    def payroll_csv():
        month = month_arg()
        data = render_monthly_csv(payroll, container.staff_service.list_staff(), month, rounding_arg())
        filename = f"payroll_{month.strftime('%Y-%m')}.csv"
        return app.response_class(
            data,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/staff/<staff_id>/records", methods=["GET"], endpoint="staff_month_records")
    @owner_only
    def staff_month_records(staff_id: str):
        container.staff_service.get(staff_id)
        month = month_arg()
        mode = rounding_arg()
        rows = []
        for r in payroll.monthly_daily_records(staff_id, month):
            row = record_to_dict(r)
            row["hours"] = payroll.daily_hours(r, mode)
            rows.append(row)
        return jsonify(rows)
