from __future__ import annotations

from flask import Flask, request

from ..auth.guards import ADMIN_ONLY, STAFF_EDITORS
from ..common.http import json_body, ok, paged
from ..common.pagination import parse_page_request
from ..container import Container
from .model import Staff


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.staff_service

    @app.route("/api/staff", methods=["GET"], endpoint="staff_list")
    @guards.login_required
    def staff_list():
        page = service.list_staff(search=request.args.get("search"), page=parse_page_request(request.args))
        return paged(page, Staff.to_dict)

    @app.route("/api/staff/<int:staff_id>", methods=["GET"], endpoint="staff_get")
    @guards.login_required
    def staff_get(staff_id: int):
        return ok(service.get_staff(staff_id).to_dict())

    @app.route("/api/staff", methods=["POST"], endpoint="staff_create")
    @guards.roles_required(STAFF_EDITORS)
    def staff_create():
        staff = service.create_staff(json_body())
        return ok(staff.to_dict(), message="Staff member created successfully", status=201)

    @app.route("/api/staff/<int:staff_id>", methods=["PUT"], endpoint="staff_update")
    @guards.roles_required(STAFF_EDITORS)
    def staff_update(staff_id: int):
        staff = service.update_staff(staff_id, json_body())
        return ok(staff.to_dict(), message="Staff member updated successfully")

    @app.route("/api/staff/<int:staff_id>", methods=["DELETE"], endpoint="staff_delete")
    @guards.roles_required(ADMIN_ONLY)
    def staff_delete(staff_id: int):
        service.delete_staff(staff_id)
        return ok(message="Staff member deleted successfully")

    @app.route("/api/staff/<int:staff_id>/meetings", methods=["GET"], endpoint="staff_meetings")
    @guards.login_required
    def staff_meetings(staff_id: int):
        history = service.meeting_history(staff_id)
        return ok(list(history), count=len(history))
