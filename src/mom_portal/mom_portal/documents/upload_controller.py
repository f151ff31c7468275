from __future__ import annotations

from flask import Flask, request, send_file

from ..auth.guards import ANY_ROLE
from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    uploads = container.upload_service

    @app.route("/api/upload/document", methods=["POST"], endpoint="upload_document")
    @guards.roles_required(ANY_ROLE)
    def upload_document():
        doc = uploads.upload_new(request.files.get("file"), request.form)
        return ok(doc.to_dict(), message="File uploaded successfully", status=201)

    @app.route("/api/upload/document/<int:document_id>", methods=["POST"], endpoint="upload_attach")
    @guards.roles_required(ANY_ROLE)
    def upload_attach(document_id: int):
        doc = uploads.attach(document_id, request.files.get("file"))
        return ok(doc.to_dict(), message="File uploaded successfully")

    @app.route("/api/upload/document/<int:document_id>", methods=["GET"], endpoint="upload_download")
    @guards.login_required
    def upload_download(document_id: int):
        doc, path = uploads.download(document_id)
        download_name = doc.document_name
        if path.suffix and not download_name.lower().endswith(path.suffix.lower()):
            download_name += path.suffix
        return send_file(path, mimetype=doc.file_type, as_attachment=True, download_name=download_name)

    @app.route("/api/upload/document/<int:document_id>", methods=["DELETE"], endpoint="upload_delete")
    @guards.roles_required(ANY_ROLE)
    def upload_delete(document_id: int):
        uploads.delete(document_id)
        return ok(message="Document and file deleted successfully")
