from __future__ import annotations

from flask import Flask

from ..auth.guards import ANY_ROLE
from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.document_service

    @app.route("/api/meetings/<int:meeting_id>/documents", methods=["GET"], endpoint="documents_list")
    @guards.login_required
    def documents_list(meeting_id: int):
        docs = service.list_documents(meeting_id)
        return ok([d.to_dict() for d in docs], count=len(docs))

    @app.route("/api/meetings/<int:meeting_id>/documents", methods=["POST"], endpoint="documents_add")
    @guards.roles_required(ANY_ROLE)
    def documents_add(meeting_id: int):
        doc = service.add_document(meeting_id, json_body())
        return ok(doc.to_dict(), message="Document added successfully", status=201)

    @app.route("/api/meetings/<int:meeting_id>/documents/reorder", methods=["PUT"], endpoint="documents_reorder")
    @guards.roles_required(ANY_ROLE)
    def documents_reorder(meeting_id: int):
        docs = service.reorder(meeting_id, json_body().get("documentOrder"))
        return ok([d.to_dict() for d in docs], message="Documents reordered successfully")

    @app.route("/api/meetings/<int:meeting_id>/documents/stats", methods=["GET"], endpoint="documents_stats")
    @guards.login_required
    def documents_stats(meeting_id: int):
        return ok(service.stats(meeting_id).to_dict())

    @app.route("/api/meeting-documents/<int:document_id>", methods=["GET"], endpoint="documents_get")
    @guards.login_required
    def documents_get(document_id: int):
        return ok(service.get_document(document_id).to_dict())

    @app.route("/api/meeting-documents/<int:document_id>", methods=["PUT"], endpoint="documents_update")
    @guards.roles_required(ANY_ROLE)
    def documents_update(document_id: int):
        doc = service.update_document(document_id, json_body())
        return ok(doc.to_dict(), message="Document updated successfully")

    @app.route("/api/meeting-documents/<int:document_id>", methods=["DELETE"], endpoint="documents_delete")
    @guards.roles_required(ANY_ROLE)
    def documents_delete(document_id: int):
        service.delete_document(document_id)
        return ok(message="Document deleted successfully")
