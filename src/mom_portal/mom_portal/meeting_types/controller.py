from __future__ import annotations

from flask import Flask, request

from ..auth.guards import ADMIN_ONLY
from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.meeting_type_service

    @app.route("/api/meeting-types", methods=["GET"], endpoint="meeting_types_list")
    @guards.login_required
    def meeting_types_list():
        types = service.list_types(search=request.args.get("search"))
        return ok([t.to_dict() for t in types], count=len(types))

    @app.route("/api/meeting-types/<int:meeting_type_id>", methods=["GET"], endpoint="meeting_types_get")
    @guards.login_required
    def meeting_types_get(meeting_type_id: int):
        return ok(service.get_type(meeting_type_id).to_dict())

    @app.route("/api/meeting-types", methods=["POST"], endpoint="meeting_types_create")
    @guards.roles_required(ADMIN_ONLY)
    def meeting_types_create():
        mt = service.create_type(json_body())
        return ok(mt.to_dict(), message="Meeting type created successfully", status=201)

    @app.route("/api/meeting-types/<int:meeting_type_id>", methods=["PUT"], endpoint="meeting_types_update")
    @guards.roles_required(ADMIN_ONLY)
    def meeting_types_update(meeting_type_id: int):
        mt = service.update_type(meeting_type_id, json_body())
        return ok(mt.to_dict(), message="Meeting type updated successfully")

    @app.route("/api/meeting-types/<int:meeting_type_id>", methods=["DELETE"], endpoint="meeting_types_delete")
    @guards.roles_required(ADMIN_ONLY)
    def meeting_types_delete(meeting_type_id: int):
        service.delete_type(meeting_type_id)
        return ok(message="Meeting type deleted successfully")
