from __future__ import annotations

import pytest

from src.hr_attendance.hr_attendance.admins.service import password_matches
from src.hr_attendance.hr_attendance.core.enums import AdminRole
from src.hr_attendance.hr_attendance.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def service(container):
    return container.admin_service


def test_register_admin(service):
    admin = service.register(
        username="hr.lead", email="HR@Example.com", phone="9876500000", role="Super Admin", password="Secret123"
    )

    assert admin.role == AdminRole.SUPER_ADMIN
    assert admin.email == "hr@example.com"
    assert len(admin.admin_id) == 32
    assert password_matches(admin.password_hash, "Secret123")


def test_register_rejects_duplicates_and_bad_role(service, make_admin):
    existing = make_admin()

    with pytest.raises(ConflictError):
        service.register(
            username=existing.username, email="new@example.com", phone="9876500000", role="HR", password="Secret123"
        )
    with pytest.raises(ValidationError):
        service.register(username="x", email="x@example.com", phone="9876500000", role="Owner", password="Secret123")


def test_update_profile(service, make_admin):
    admin, other = make_admin(), make_admin()

    updated = service.update_profile(admin.admin_id, username="renamed", phone="9000000009")
    assert (updated.username, updated.phone) == ("renamed", "9000000009")

    with pytest.raises(ConflictError):
        service.update_profile(admin.admin_id, username=other.username)
    with pytest.raises(ValidationError):
        service.update_profile(admin.admin_id)
    with pytest.raises(NotFoundError):
        service.update_profile("missing", phone="9000000009")


def test_change_password(service, make_admin, password):
    admin = make_admin()

    with pytest.raises(AuthenticationError):
        service.change_password(admin.admin_id, current_password="Wrong1234", new_password="NewSecret1")
    with pytest.raises(ValidationError):
        service.change_password(admin.admin_id, current_password=password, new_password="short")

    service.change_password(admin.admin_id, current_password=password, new_password="NewSecret1")
    assert password_matches(service.profile(admin.admin_id).password_hash, "NewSecret1")


def test_password_matches_tolerates_placeholder_hash():
    assert password_matches("CHANGE_ME", "anything") is False
