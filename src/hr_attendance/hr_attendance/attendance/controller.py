from __future__ import annotations

from flask import Flask, request

from ..auth.gate import ALL_ADMINS, EMPLOYEES_ONLY
from ..container import Container
from ..core.exceptions import ValidationError
from ..web.guards import current_principal, guarded
from ..web.responses import api_response, json_body

API = "/api/v1"


def _entries_from(data: dict) -> list:
    records = data.get("records")
    if not isinstance(records, list):
        raise ValidationError("Attendance records must be a list")
    return [
        {
            "employee_id": item.get("employeeId"),
            "status": item.get("status"),
            "remarks": item.get("remarks"),
        }
        if isinstance(item, dict)
        else item
        for item in records
    ]


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    resolver = container.identity_resolver

    @app.route(f"{API}/get-employee-details", methods=["GET"], endpoint="get_employee_details")
    @guarded(resolver, ALL_ADMINS)
    def get_employee_details():
        admin_id = current_principal().identity_id
        views = attendance.get_today(admin_id)

        employee_id = (request.args.get("employeeId") or "").strip()
        if employee_id:
            container.employee_service.get(admin_id, employee_id)
            views = [v for v in views if v.employee.employee_id == employee_id]

        return api_response([v.to_public_dict() for v in views], "Employee details fetched successfully")

    @app.route(f"{API}/mark-attendance", methods=["POST"], endpoint="mark_attendance")
    @guarded(resolver, ALL_ADMINS)
    def mark_attendance():
        data = json_body(request)
        result = attendance.mark_bulk(
            current_principal().identity_id,
            _entries_from(data),
            work_date=data.get("date"),
        )
        message = "Attendance marked successfully"
        if result.skipped:
            message = f"Attendance marked; {len(result.skipped)} record(s) skipped"
        return api_response(result.to_public_dict(), message, 201)

    @app.route(f"{API}/update-attendance", methods=["PATCH"], endpoint="update_attendance")
    @guarded(resolver, ALL_ADMINS)
    def update_attendance():
        data = json_body(request)
        record = attendance.update(
            current_principal().identity_id,
            data.get("attendanceId") or data.get("id"),
            status=data.get("status"),
            remarks=data.get("remarks"),
        )
        return api_response(record.to_public_dict(), "Attendance updated successfully")

    @app.route(f"{API}/get-attendance-history", methods=["GET"], endpoint="get_attendance_history")
    @guarded(resolver, ALL_ADMINS)
    def get_attendance_history():
        days = attendance.history(
            current_principal().identity_id,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return api_response([d.to_public_dict() for d in days], "Attendance history fetched successfully")

    @app.route(f"{API}/employee/get-attendance-history", methods=["GET"], endpoint="employee_attendance_history")
    @guarded(resolver, EMPLOYEES_ONLY)
    def employee_attendance_history():
        rows = attendance.employee_history(
            current_principal().identity_id,
            start_date=request.args.get("startDate"),
            end_date=request.args.get("endDate"),
        )
        return api_response([r.record.to_public_dict() for r in rows], "Attendance history fetched successfully")
