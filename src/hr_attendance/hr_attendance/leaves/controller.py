from __future__ import annotations

from flask import Flask, request

from ..auth.gate import ALL_ADMINS, EMPLOYEES_ONLY
from ..container import Container
from ..web.guards import current_principal, guarded
from ..web.responses import api_response, json_body

API = "/api/v1"


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service
    resolver = container.identity_resolver

    @app.route(f"{API}/get-leave-history", methods=["GET"], endpoint="get_leave_history")
    @guarded(resolver, ALL_ADMINS)
    def get_leave_history():
        rows = leaves.admin_history(current_principal().identity_id, status=request.args.get("status"))
        return api_response([r.to_public_dict() for r in rows], "Leave history fetched successfully")

    @app.route(f"{API}/set-leave-status", methods=["PATCH"], endpoint="set_leave_status")
    @guarded(resolver, ALL_ADMINS)
    def set_leave_status():
        data = json_body(request)
        leave = leaves.decide(
            data.get("leaveId"),
            current_principal().identity_id,
            status=data.get("status"),
            rejection_reason=data.get("rejectionReason"),
        )
        return api_response(leave.to_public_dict(), f"Leave request {leave.status.value.lower()}")

    @app.route(f"{API}/employee/apply-leave", methods=["POST"], endpoint="apply_leave")
    @guarded(resolver, EMPLOYEES_ONLY)
    def apply_leave():
        data = json_body(request)
        leave = leaves.apply(
            current_principal().identity_id,
            leave_type=data.get("leaveType"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            reason=data.get("reason"),
        )
        return api_response(leave.to_public_dict(), "Leave applied successfully", 201)

    @app.route(f"{API}/employee/get-leave-history", methods=["GET"], endpoint="employee_leave_history")
    @guarded(resolver, EMPLOYEES_ONLY)
    def employee_leave_history():
        rows = leaves.employee_history(current_principal().identity_id, status=request.args.get("status"))
        return api_response([r.to_public_dict() for r in rows], "Leave history fetched successfully")

    @app.route(f"{API}/employee/delete-leave", methods=["POST"], endpoint="delete_leave")
    @guarded(resolver, EMPLOYEES_ONLY)
    def delete_leave():
        leaves.withdraw(json_body(request).get("leaveId"), current_principal().identity_id)
        return api_response({}, "Leave request deleted successfully")
