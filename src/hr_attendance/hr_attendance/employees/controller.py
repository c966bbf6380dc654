from __future__ import annotations

from flask import Flask, request

from ..auth.gate import ALL_ADMINS, EMPLOYEES_ONLY, HR_ADMINS, SUPER_ADMIN_ONLY
from ..container import Container
from ..core.exceptions import ValidationError
from ..web.guards import current_principal, guarded
from ..web.responses import api_response, json_body

API = "/api/v1"

# JSON field -> service field for employee updates
_UPDATE_FIELDS = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "designation": "designation",
    "department": "department",
    "joiningDate": "joining_date",
    "employeeType": "employee_type",
    "shiftDetails": "shift_details",
    "adminId": "admin_id",
}


def _employee_id_from(data: dict) -> str:
    employee_id = str(data.get("id") or data.get("employeeId") or "").strip()
    if not employee_id:
        raise ValidationError("Employee ID is required")
    return employee_id


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    resolver = container.identity_resolver

    @app.route(f"{API}/register-employee", methods=["POST"], endpoint="register_employee")
    @guarded(resolver, HR_ADMINS)
    def register_employee():
        data = json_body(request)
        employee = employees.register(
            admin_id=current_principal().identity_id,
            employee_code=data.get("employeeCode"),
            full_name=data.get("fullName"),
            email=data.get("email"),
            phone=data.get("phone"),
            designation=data.get("designation"),
            department=data.get("department"),
            joining_date=data.get("joiningDate"),
            employee_type=data.get("employeeType"),
            password=data.get("password"),
            shift_details=data.get("shiftDetails"),
        )
        return api_response(employee.to_public_dict(), "Employee registered successfully", 201)

    @app.route(f"{API}/get-employees", methods=["GET"], endpoint="get_employees")
    @guarded(resolver, ALL_ADMINS)
    def get_employees():
        rows = employees.list_employees(current_principal().identity_id, status=request.args.get("status"))
        return api_response([e.to_public_dict() for e in rows], "Employees fetched successfully")

    @app.route(f"{API}/update-employee", methods=["PATCH"], endpoint="update_employee")
    @guarded(resolver, HR_ADMINS)
    def update_employee():
        data = json_body(request)
        changes = {field: data[key] for key, field in _UPDATE_FIELDS.items() if key in data}
        employee = employees.update(current_principal().identity_id, _employee_id_from(data), changes)
        return api_response(employee.to_public_dict(), "Employee updated successfully")

    @app.route(f"{API}/delete-employee", methods=["POST"], endpoint="delete_employee")
    @guarded(resolver, SUPER_ADMIN_ONLY)
    def delete_employee():
        principal = current_principal()
        employee = employees.deactivate(
            principal.identity_id, _employee_id_from(json_body(request)), role=principal.role
        )
        return api_response(employee.to_public_dict(), "Employee deactivated successfully")

    @app.route(f"{API}/employee/profile", methods=["GET"], endpoint="employee_profile")
    @guarded(resolver, EMPLOYEES_ONLY)
    def employee_profile():
        return api_response(current_principal().to_public_dict(), "Employee profile fetched successfully")
