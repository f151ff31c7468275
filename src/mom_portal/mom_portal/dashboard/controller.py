from __future__ import annotations

from flask import Flask, request

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    service = container.dashboard_service

    @app.route("/api/dashboard/overview", methods=["GET"], endpoint="dashboard_overview")
    @guards.login_required
    def dashboard_overview():
        return ok(service.overview())

    @app.route("/api/dashboard/analytics", methods=["GET"], endpoint="dashboard_analytics")
    @guards.login_required
    def dashboard_analytics():
        return ok(service.analytics(period=request.args.get("period")))

    @app.route("/api/dashboard/staff-performance", methods=["GET"], endpoint="dashboard_staff_performance")
    @guards.login_required
    def dashboard_staff_performance():
        return ok(service.staff_performance(period=request.args.get("period")))

    @app.route("/api/dashboard/meeting-types", methods=["GET"], endpoint="dashboard_meeting_types")
    @guards.login_required
    def dashboard_meeting_types():
        return ok(service.meeting_type_analytics())

    @app.route("/api/dashboard/recent-activity", methods=["GET"], endpoint="dashboard_recent_activity")
    @guards.login_required
    def dashboard_recent_activity():
        return ok(service.recent_activity(limit=request.args.get("limit")))
