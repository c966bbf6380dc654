from __future__ import annotations

from flask import Flask, request

from ..auth.gate import ALL_ADMINS
from ..container import Container
from ..web.guards import current_principal, guarded
from ..web.responses import api_response, json_body

API = "/api/v1"


def register(app: Flask, container: Container) -> None:
    admins = container.admin_service
    admin_only = guarded(container.identity_resolver, ALL_ADMINS)

    @app.route(f"{API}/auth/register", methods=["POST"], endpoint="admin_register")
    def admin_register():
        data = json_body(request)
        admin = admins.register(
            username=data.get("username"),
            email=data.get("email"),
            phone=data.get("phone"),
            role=data.get("role"),
            password=data.get("password"),
        )
        return api_response(admin.to_public_dict(), "Admin registered successfully", 201)

    @app.route(f"{API}/profile", methods=["GET"], endpoint="admin_profile")
    @admin_only
    def admin_profile():
        admin = admins.profile(current_principal().identity_id)
        return api_response(admin.to_public_dict(), "Admin profile fetched successfully")

    @app.route(f"{API}/update-profile", methods=["PATCH"], endpoint="admin_update_profile")
    @admin_only
    def admin_update_profile():
        data = json_body(request)
        admin = admins.update_profile(
            current_principal().identity_id,
            username=data.get("username"),
            phone=data.get("phone"),
        )
        return api_response(admin.to_public_dict(), "Admin profile updated successfully")

    @app.route(f"{API}/change-password", methods=["POST"], endpoint="admin_change_password")
    @admin_only
    def admin_change_password():
        data = json_body(request)
        admins.change_password(
            current_principal().identity_id,
            current_password=data.get("currentPassword"),
            new_password=data.get("newPassword"),
        )
        return api_response({}, "Admin password changed successfully")
