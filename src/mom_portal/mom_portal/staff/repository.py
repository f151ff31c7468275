from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import Role
from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for Staff.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Staff]:
        raise NotImplementedError

    def list_page(self, *, search: Optional[str], page: PageRequest) -> Page[Staff]:
        raise NotImplementedError

    def existing_ids(self, staff_ids: Iterable[int]) -> set[int]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_name: str,
        mobile_no: Optional[str],
        email_address: Optional[str],
        role: Role,
        department: Optional[str],
        remarks: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(self, staff: Staff) -> bool:
        raise NotImplementedError

    def delete_by_id(self, staff_id: int) -> bool:
        raise NotImplementedError

    def count_memberships(self, staff_id: int) -> int:
        raise NotImplementedError

    def list_meeting_history(self, staff_id: int) -> Sequence[dict]:
        raise NotImplementedError
