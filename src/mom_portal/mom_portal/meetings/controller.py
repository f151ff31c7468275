from __future__ import annotations

from flask import Flask, request

from ..auth.guards import ADMIN_ONLY, ANY_ROLE
from ..common.http import json_body, ok, paged
from ..common.pagination import parse_page_request
from ..container import Container
from .model import Meeting
from .service import parse_meeting_filters


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.meeting_service

    @app.route("/api/meetings", methods=["GET"], endpoint="meetings_list")
    @guards.login_required
    def meetings_list():
        page = service.list_meetings(
            filters=parse_meeting_filters(request.args),
            page=parse_page_request(request.args),
        )
        return paged(page, Meeting.to_dict)

    @app.route("/api/meetings/stats", methods=["GET"], endpoint="meetings_stats")
    @guards.login_required
    def meetings_stats():
        return ok(service.stats().to_dict())

    @app.route("/api/meetings/upcoming", methods=["GET"], endpoint="meetings_upcoming")
    @guards.login_required
    def meetings_upcoming():
        meetings = service.upcoming(limit=request.args.get("limit"))
        return ok([m.to_dict() for m in meetings], count=len(meetings))

    @app.route("/api/meetings/<int:meeting_id>", methods=["GET"], endpoint="meetings_get")
    @guards.login_required
    def meetings_get(meeting_id: int):
        return ok(service.get_meeting_detail(meeting_id))

    @app.route("/api/meetings", methods=["POST"], endpoint="meetings_create")
    @guards.roles_required(ANY_ROLE)
    def meetings_create():
        meeting = service.create_meeting(json_body())
        return ok(meeting.to_dict(), message="Meeting created successfully", status=201)

    @app.route("/api/meetings/<int:meeting_id>", methods=["PUT"], endpoint="meetings_update")
    @guards.roles_required(ANY_ROLE)
    def meetings_update(meeting_id: int):
        meeting = service.update_meeting(meeting_id, json_body())
        return ok(meeting.to_dict(), message="Meeting updated successfully")

    @app.route("/api/meetings/<int:meeting_id>/cancel", methods=["PUT"], endpoint="meetings_cancel")
    @guards.roles_required(ANY_ROLE)
    def meetings_cancel(meeting_id: int):
        meeting = service.cancel_meeting(meeting_id, reason=json_body().get("cancellationReason"))
        return ok(meeting.to_dict(), message="Meeting cancelled successfully")

    @app.route("/api/meetings/<int:meeting_id>", methods=["DELETE"], endpoint="meetings_delete")
    @guards.roles_required(ADMIN_ONLY)
    def meetings_delete(meeting_id: int):
        service.delete_meeting(meeting_id)
        return ok(message="Meeting deleted successfully")

    @app.route("/api/meetings/<int:meeting_id>/attendance", methods=["GET"], endpoint="meetings_attendance")
    @guards.login_required
    def meetings_attendance(meeting_id: int):
        return ok(container.member_service.attendance(meeting_id).to_dict())
