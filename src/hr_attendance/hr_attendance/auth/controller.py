from __future__ import annotations

from flask import Flask, request

from ..core.constants import REFRESH_COOKIE
from ..core.enums import IdentityKind
from ..container import Container
from ..web.cookies import clear_auth_cookies, set_auth_cookies
from ..web.guards import current_principal, guarded
from ..web.responses import api_response, json_body
from .gate import ALL_ADMINS, EMPLOYEES_ONLY
from .service import LoginResult

API = "/api/v1"


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    secure = container.cookie_secure

    def _session_response(result: LoginResult, message: str, key: str):
        body = {
            key: result.principal.identity.to_public_dict(),
            "accessToken": result.tokens.access_token,
            "refreshToken": result.tokens.refresh_token,
        }
        resp, status = api_response(body, message)
        return set_auth_cookies(resp, result.tokens, secure=secure), status

    def _refreshed_response(result: LoginResult):
        body = {
            "accessToken": result.tokens.access_token,
            "refreshToken": result.tokens.refresh_token,
        }
        resp, status = api_response(body, "Access token refreshed successfully")
        return set_auth_cookies(resp, result.tokens, secure=secure), status

    def _incoming_refresh_token():
        return request.cookies.get(REFRESH_COOKIE) or json_body(request).get("refreshToken")

    def _logged_out(message: str):
        auth.logout(current_principal())
        resp, status = api_response({}, message)
        return clear_auth_cookies(resp, secure=secure), status

    @app.route(f"{API}/auth/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = json_body(request)
        result = auth.login_admin(
            email=data.get("email"),
            username=data.get("username"),
            password=data.get("password"),
        )
        return _session_response(result, "Admin logged in successfully", "admin")

    @app.route(f"{API}/refresh-token", methods=["POST"], endpoint="admin_refresh_token")
    def admin_refresh_token():
        return _refreshed_response(auth.refresh(_incoming_refresh_token(), kind=IdentityKind.ADMIN))

    @app.route(f"{API}/logout", methods=["POST"], endpoint="admin_logout")
    @guarded(container.identity_resolver, ALL_ADMINS)
    def admin_logout():
        return _logged_out("Admin logged out successfully")

    @app.route(f"{API}/employee/login", methods=["POST"], endpoint="employee_login")
    def employee_login():
        data = json_body(request)
        result = auth.login_employee(
            email=data.get("email"),
            employee_code=data.get("employeeCode") or data.get("employeeId"),
            password=data.get("password"),
        )
        return _session_response(result, "Employee logged in successfully", "employee")

    @app.route(f"{API}/employee/refresh-token", methods=["POST"], endpoint="employee_refresh_token")
    def employee_refresh_token():
        return _refreshed_response(auth.refresh(_incoming_refresh_token(), kind=IdentityKind.EMPLOYEE))

    @app.route(f"{API}/employee/logout", methods=["POST"], endpoint="employee_logout")
    @guarded(container.identity_resolver, EMPLOYEES_ONLY)
    def employee_logout():
        return _logged_out("Employee logged out successfully")
