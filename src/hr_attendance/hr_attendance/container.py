from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AdminService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_session_repository import MySQLSessionRepository
from .auth.repository import SessionRepository
from .auth.resolver import IdentityResolver
from .auth.service import AuthService
from .auth.tokens import TokenIssuer, TokenSettings
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService


@dataclass(frozen=True)
class Container:
    admins_repo: AdminRepository
    employees_repo: EmployeeRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    token_issuer: TokenIssuer
    identity_resolver: IdentityResolver

    auth_service: AuthService
    admin_service: AdminService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService

    cookie_secure: bool = True
    conn: Optional[DatabaseConnection] = None


def token_settings_from(settings) -> TokenSettings:
    """Build token settings from a ``config.*`` settings module."""
    return TokenSettings(
        access_secret=str(getattr(settings, "ACCESS_TOKEN_SECRET", "")),
        refresh_secret=str(getattr(settings, "REFRESH_TOKEN_SECRET", "")),
        access_ttl=timedelta(minutes=int(getattr(settings, "ACCESS_TOKEN_EXPIRY_MINUTES", 15))),
        refresh_ttl=timedelta(days=int(getattr(settings, "REFRESH_TOKEN_EXPIRY_DAYS", 10))),
    )


def assemble(
    *,
    admins_repo: AdminRepository,
    employees_repo: EmployeeRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    token_settings: TokenSettings,
    cookie_secure: bool = True,
    conn: Optional[DatabaseConnection] = None,
    clock=None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""
    token_issuer = TokenIssuer(token_settings, sessions_repo, clock=clock)
    identity_resolver = IdentityResolver(token_issuer, admins_repo, employees_repo)

    return Container(
        admins_repo=admins_repo,
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_issuer=token_issuer,
        identity_resolver=identity_resolver,
        auth_service=AuthService(admins_repo, employees_repo, token_issuer),
        admin_service=AdminService(admins_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        cookie_secure=cookie_secure,
        conn=conn,
    )


def build_container(*, db_config: dict, token_settings: TokenSettings, cookie_secure: bool = True) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        admins_repo=MySQLAdminRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        token_settings=token_settings,
        cookie_secure=cookie_secure,
        conn=conn,
    )
