from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Callable, Optional

from ..common.datetime_utils import fmt_date, now_local, start_of_week
from ..common.validators import require_int
from ..core.constants import DASHBOARD_PERIODS, DEFAULT_ACTIVITY_LIMIT, DEFAULT_DASHBOARD_PERIOD, MAX_PAGE_SIZE
from ..core.exceptions import ValidationError
from .repository import DashboardRepository

TOP_STAFF_LIMIT = 5
RECENT_LIMIT = 5


def rate(part: int, whole: int) -> float:
    """Percentage rounded to 2 decimals; 0 when there is nothing to divide."""
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def resolve_period(period: Optional[str]) -> tuple[str, int]:
    """Unknown period keys fall back to the default window."""
    key = period if period in DASHBOARD_PERIODS else DEFAULT_DASHBOARD_PERIOD
    return key, DASHBOARD_PERIODS[key]


class DashboardService:
    """Read-only rollups over meetings, staff, members and documents."""

    def __init__(self, dashboard: DashboardRepository, *, clock: Optional[Callable[[], Any]] = None):
        self._dashboard = dashboard
        self._clock = clock or now_local

    def _window(self, period: Optional[str]) -> tuple[str, date, date]:
        key, days = resolve_period(period)
        end = self._clock().date()
        return key, end - timedelta(days=days), end

    def overview(self) -> dict:
        now = self._clock()
        today = now.date()
        totals = self._dashboard.totals()
        members = self._dashboard.member_totals()

        active_staff = []
        for r in self._dashboard.staff_activity(TOP_STAFF_LIMIT):
            meeting_count = int(r["meeting_count"])
            attendance_count = int(r["attendance_count"])
            active_staff.append(
                {
                    "staffId": int(r["staff_id"]),
                    "staffName": r["staff_name"],
                    "emailAddress": r.get("email_address"),
                    "meetingCount": meeting_count,
                    "attendanceCount": attendance_count,
                    "attendanceRate": rate(attendance_count, meeting_count),
                }
            )

        return {
            "overview": {
                "totalMeetings": totals["meetings"],
                "totalStaff": totals["staff"],
                "totalMeetingTypes": totals["meeting_types"],
                "totalDocuments": totals["documents"],
                "meetingsThisMonth": self._dashboard.count_active_meetings_since(today.replace(day=1)),
                "meetingsThisWeek": self._dashboard.count_active_meetings_since(start_of_week(today)),
                "upcomingMeetings": self._dashboard.count_upcoming(now),
            },
            "meetingStatusStats": list(self._dashboard.status_counts()),
            "attendanceStats": {"totalMembers": members["total"], "presentMembers": members["present"]},
            "activeStaff": active_staff,
            "meetingTypeUsage": [
                {
                    "meetingTypeId": int(r["meeting_type_id"]),
                    "meetingTypeName": r["meeting_type_name"],
                    "count": int(r["count"]),
                }
                for r in self._dashboard.meeting_type_usage()
            ],
            "recentMeetings": [m.to_dict() for m in self._dashboard.recent_meetings(RECENT_LIMIT)],
        }

    def analytics(self, *, period: Optional[str] = None) -> dict:
        key, start, end = self._window(period)

        trends = [
            {
                "date": fmt_date(r["day"]),
                "count": int(r["count"]),
                "completed": int(r["completed"]),
                "cancelled": int(r["cancelled"]),
            }
            for r in self._dashboard.meeting_trends(start, end)
        ]

        attendance = []
        for r in self._dashboard.attendance_by_meeting(start, end):
            total = int(r["total_members"])
            present = int(r["present_members"])
            attendance.append(
                {
                    "meetingId": int(r["meeting_id"]),
                    "meetingTitle": r["meeting_title"],
                    "meetingDate": fmt_date(r["meeting_date"]),
                    "totalMembers": total,
                    "presentMembers": present,
                    "attendanceRate": rate(present, total),
                }
            )

        avg = round(sum(a["attendanceRate"] for a in attendance) / len(attendance), 2) if attendance else 0.0
        return {
            "period": key,
            "startDate": fmt_date(start),
            "endDate": fmt_date(end),
            "meetingTrends": trends,
            "attendanceAnalytics": attendance,
            "avgAttendanceRate": avg,
        }

    def staff_performance(self, *, period: Optional[str] = None) -> dict:
        key, start, end = self._window(period)
        rows = []
        for r in self._dashboard.staff_performance(start, end):
            total = int(r["total"])
            attended = int(r["attended"])
            rows.append(
                {
                    "staffId": int(r["staff_id"]),
                    "staffName": r["staff_name"],
                    "emailAddress": r.get("email_address"),
                    "mobileNo": r.get("mobile_no"),
                    "totalMeetings": total,
                    "attendedMeetings": attended,
                    "missedMeetings": total - attended,
                    "attendanceRate": rate(attended, total),
                }
            )
        rows.sort(key=lambda x: (-x["attendanceRate"], x["staffName"] or ""))
        return {"period": key, "startDate": fmt_date(start), "endDate": fmt_date(end), "staffPerformance": rows}

    def meeting_type_analytics(self) -> list[dict]:
        rows = []
        for r in self._dashboard.meeting_type_breakdown():
            total = int(r["total"])
            completed = int(r["completed"])
            rows.append(
                {
                    "meetingTypeId": int(r["meeting_type_id"]),
                    "meetingTypeName": r["meeting_type_name"],
                    "totalMeetings": total,
                    "completedMeetings": completed,
                    "cancelledMeetings": int(r["cancelled"]),
                    "scheduledMeetings": int(r["scheduled"]),
                    "completionRate": rate(completed, total),
                }
            )
        rows.sort(key=lambda x: (-x["totalMeetings"], x["meetingTypeName"]))
        return rows

    def recent_activity(self, *, limit: Any = None) -> dict:
        n = DEFAULT_ACTIVITY_LIMIT if limit in (None, "") else require_int(limit, "limit")
        if n < 1 or n > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        documents = []
        for doc, meeting_title in self._dashboard.recent_documents(RECENT_LIMIT):
            item = doc.to_dict()
            item["meetingTitle"] = meeting_title
            documents.append(item)

        return {
            "recentMeetings": [m.to_dict() for m in self._dashboard.recent_meetings(n, by_modified=True)],
            "recentStaff": [s.to_dict() for s in self._dashboard.recent_staff(RECENT_LIMIT)],
            "recentDocuments": documents,
        }
