from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from .auth.guards import RouteGuards
from .auth.mysql_user_repository import MySQLUserRepository
from .auth.repository import UserRepository
from .auth.service import AuthService
from .auth.tokens import TokenIssuer
from .common.ratelimit import SlidingWindowRateLimiter
from .core.constants import ALLOWED_UPLOAD_MIME_TYPES, DEFAULT_TOKEN_HOURS, MAX_UPLOAD_BYTES
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.repository import DashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.repository import DocumentRepository
from .documents.service import DocumentService
from .documents.storage import LocalFileStorage
from .documents.upload_service import UploadService
from .meeting_types.mysql_meeting_type_repository import MySQLMeetingTypeRepository
from .meeting_types.repository import MeetingTypeRepository
from .meeting_types.service import MeetingTypeService
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.repository import MeetingRepository
from .meetings.service import MeetingService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    staff_repo: StaffRepository
    meeting_types_repo: MeetingTypeRepository
    meetings_repo: MeetingRepository
    members_repo: MemberRepository
    documents_repo: DocumentRepository
    dashboard_repo: DashboardRepository

    auth_service: AuthService
    staff_service: StaffService
    meeting_type_service: MeetingTypeService
    meeting_service: MeetingService
    member_service: MemberService
    document_service: DocumentService
    upload_service: UploadService
    dashboard_service: DashboardService

    guards: RouteGuards
    auth_rate_limiter: SlidingWindowRateLimiter
    storage: LocalFileStorage
    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    staff_repo: StaffRepository,
    meeting_types_repo: MeetingTypeRepository,
    meetings_repo: MeetingRepository,
    members_repo: MemberRepository,
    documents_repo: DocumentRepository,
    dashboard_repo: DashboardRepository,
    tokens: TokenIssuer,
    storage: LocalFileStorage,
    rate_limiter: SlidingWindowRateLimiter,
    conn: Optional[DatabaseConnection] = None,
    clock: Optional[Callable[[], Any]] = None,
) -> Container:
    """Assemble services over any repository implementations (MySQL or in-memory)."""
    auth_service = AuthService(users_repo, tokens, clock=clock)
    staff_service = StaffService(staff_repo)
    meeting_type_service = MeetingTypeService(meeting_types_repo)
    meeting_service = MeetingService(meetings_repo, meeting_types_repo, members_repo, documents_repo, clock=clock)
    member_service = MemberService(members_repo, meetings_repo, staff_repo)
    document_service = DocumentService(documents_repo, meetings_repo, staff_repo)
    upload_service = UploadService(document_service, storage)
    dashboard_service = DashboardService(dashboard_repo, clock=clock)

    return Container(
        users_repo=users_repo,
        staff_repo=staff_repo,
        meeting_types_repo=meeting_types_repo,
        meetings_repo=meetings_repo,
        members_repo=members_repo,
        documents_repo=documents_repo,
        dashboard_repo=dashboard_repo,
        auth_service=auth_service,
        staff_service=staff_service,
        meeting_type_service=meeting_type_service,
        meeting_service=meeting_service,
        member_service=member_service,
        document_service=document_service,
        upload_service=upload_service,
        dashboard_service=dashboard_service,
        guards=RouteGuards(auth_service),
        auth_rate_limiter=rate_limiter,
        storage=storage,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    upload_dir: str | Path = "uploads/documents",
    max_upload_bytes: int = MAX_UPLOAD_BYTES,
    rate_limit_max_requests: int = 100,
    rate_limit_window_seconds: float = 900,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        staff_repo=MySQLStaffRepository(conn),
        meeting_types_repo=MySQLMeetingTypeRepository(conn),
        meetings_repo=MySQLMeetingRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        documents_repo=MySQLDocumentRepository(conn),
        dashboard_repo=MySQLDashboardRepository(conn),
        tokens=TokenIssuer(secret=jwt_secret, expires_hours=jwt_expires_hours),
        storage=LocalFileStorage(upload_dir, max_bytes=max_upload_bytes, allowed_types=ALLOWED_UPLOAD_MIME_TYPES),
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=rate_limit_max_requests,
            window_seconds=rate_limit_window_seconds,
        ),
        conn=conn,
    )
