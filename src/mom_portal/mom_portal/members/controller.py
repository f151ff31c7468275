from __future__ import annotations

from flask import Flask

from ..auth.guards import ANY_ROLE
from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.member_service

    @app.route("/api/meetings/<int:meeting_id>/members", methods=["GET"], endpoint="members_list")
    @guards.login_required
    def members_list(meeting_id: int):
        members = service.list_members(meeting_id)
        return ok([m.to_dict() for m in members], count=len(members))

    @app.route("/api/meetings/<int:meeting_id>/members", methods=["POST"], endpoint="members_add")
    @guards.roles_required(ANY_ROLE)
    def members_add(meeting_id: int):
        member = service.add_member(meeting_id, json_body())
        return ok(member.to_dict(), message="Member added to meeting successfully", status=201)

    @app.route("/api/meetings/<int:meeting_id>/members/bulk", methods=["POST"], endpoint="members_add_bulk")
    @guards.roles_required(ANY_ROLE)
    def members_add_bulk(meeting_id: int):
        added, members = service.add_members_bulk(meeting_id, json_body().get("staffIds"))
        return ok(
            [m.to_dict() for m in members],
            message=f"{added} member(s) added to meeting successfully",
            status=201,
        )

    @app.route("/api/meeting-members/<int:member_id>", methods=["GET"], endpoint="members_get")
    @guards.login_required
    def members_get(member_id: int):
        return ok(service.get_member(member_id).to_dict())

    @app.route("/api/meeting-members/<int:member_id>", methods=["PUT"], endpoint="members_update")
    @guards.roles_required(ANY_ROLE)
    def members_update(member_id: int):
        member = service.update_member(member_id, json_body())
        return ok(member.to_dict(), message="Meeting member updated successfully")

    @app.route("/api/meeting-members/<int:member_id>/attendance", methods=["PUT"], endpoint="members_attendance")
    @guards.roles_required(ANY_ROLE)
    def members_attendance(member_id: int):
        member = service.mark_attendance(member_id, json_body().get("isPresent"))
        state = "present" if member.is_present else "absent"
        return ok(member.to_dict(), message=f"Attendance marked as {state}")

    @app.route("/api/meeting-members/<int:member_id>", methods=["DELETE"], endpoint="members_delete")
    @guards.roles_required(ANY_ROLE)
    def members_delete(member_id: int):
        service.remove_member(member_id)
        return ok(message="Member removed from meeting successfully")
