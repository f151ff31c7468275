from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..common.pagination import Page, PageRequest
from ..common.validators import optional_email, optional_phone, optional_text, required_text
from ..core.constants import DEPARTMENT_MAX, EMAIL_MAX, REMARKS_MAX, STAFF_MOBILE_MAX, STAFF_NAME_MAX
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Staff
from .repository import StaffRepository

log = get_logger("staff")


def _parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Role must be one of Admin, Convener, Staff")


class StaffService:
    """Use case: maintain the staff directory."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def list_staff(self, *, search: Optional[str], page: PageRequest) -> Page[Staff]:
        return self._staff.list_page(search=(search or "").strip() or None, page=page)

    def get_staff(self, staff_id: int) -> Staff:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError("Staff member not found")
        return staff

    def _ensure_email_free(self, email: Optional[str], *, exclude_id: Optional[int] = None) -> None:
        if not email:
            return
        existing = self._staff.get_by_email(email)
        if existing and existing.staff_id != exclude_id:
            raise ConflictError("Staff member with this email already exists")

    def create_staff(self, data: Mapping[str, Any]) -> Staff:
        staff_name = required_text(data.get("staffName"), "Staff name", STAFF_NAME_MAX)
        email = optional_email(data.get("emailAddress"), "Email address", EMAIL_MAX)
        role = _parse_role(data.get("role") or Role.STAFF.value)
        self._ensure_email_free(email)

        staff_id = self._staff.create(
            staff_name=staff_name,
            mobile_no=optional_phone(data.get("mobileNo"), "Mobile number", STAFF_MOBILE_MAX),
            email_address=email,
            role=role,
            department=optional_text(data.get("department"), "Department", DEPARTMENT_MAX),
            remarks=optional_text(data.get("remarks"), "Remarks", REMARKS_MAX),
        )
        log.info("Staff %s created (%s)", staff_id, role.value)
        return self.get_staff(staff_id)

    def update_staff(self, staff_id: int, data: Mapping[str, Any]) -> Staff:
        current = self.get_staff(staff_id)
        changes: dict[str, Any] = {}
        if "staffName" in data:
            changes["staff_name"] = required_text(data["staffName"], "Staff name", STAFF_NAME_MAX)
        if "mobileNo" in data:
            changes["mobile_no"] = optional_phone(data["mobileNo"], "Mobile number", STAFF_MOBILE_MAX)
        if "emailAddress" in data:
            email = optional_email(data["emailAddress"], "Email address", EMAIL_MAX)
            self._ensure_email_free(email, exclude_id=current.staff_id)
            changes["email_address"] = email
        if "role" in data:
            changes["role"] = _parse_role(data["role"])
        if "department" in data:
            changes["department"] = optional_text(data["department"], "Department", DEPARTMENT_MAX)
        if "remarks" in data:
            changes["remarks"] = optional_text(data["remarks"], "Remarks", REMARKS_MAX)

        if changes:
            self._staff.update(replace(current, **changes))
        return self.get_staff(current.staff_id)

    def delete_staff(self, staff_id: int) -> None:
        staff = self.get_staff(staff_id)
        memberships = self._staff.count_memberships(staff.staff_id)
        if memberships:
            raise ConflictError(f"Cannot delete staff member: assigned to {memberships} meeting(s)")
        if not self._staff.delete_by_id(staff.staff_id):
            raise NotFoundError("Staff member not found")
        log.info("Staff %s deleted", staff.staff_id)

    def meeting_history(self, staff_id: int) -> Sequence[dict]:
        staff = self.get_staff(staff_id)
        return self._staff.list_meeting_history(staff.staff_id)
