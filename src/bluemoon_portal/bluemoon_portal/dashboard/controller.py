from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..auth.menu import visible_menu
from ..auth.web import guarded
from ..common.views import arg_int, load_failed, view_model
from ..container import Container
from ..core.constants import DEFAULT_MONTHLY_WINDOW
from ..core.exceptions import ApiError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.dashboard_service

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @gate
    def dashboard():
        try:
            summary = svc.summary(current_roles=auth.roles)
            recent = svc.recent_payments(current_roles=auth.roles)
            monthly = svc.monthly_payments(
                current_roles=auth.roles,
                months=arg_int("months", DEFAULT_MONTHLY_WINDOW) or DEFAULT_MONTHLY_WINDOW,
            )
        except ApiError as e:
            return load_failed(e)
        return view_model("dashboard", summary=asdict(summary), recent_payments=recent, monthly=monthly)

    @app.route("/totruong-dashboard", methods=["GET"], endpoint="totruong_dashboard")
    @gate
    def totruong_dashboard():
        try:
            summary = svc.to_truong_summary(current_roles=auth.roles)
            recent = svc.recent_households(current_roles=auth.roles)
        except ApiError as e:
            return load_failed(e)
        return view_model("totruong_dashboard", summary=asdict(summary), recent_households=recent)

    @app.route("/accountant-dashboard", methods=["GET"], endpoint="accountant_dashboard")
    @gate
    def accountant_dashboard():
        try:
            summary = svc.accountant_summary(current_roles=auth.roles)
            recent = svc.recent_payments(current_roles=auth.roles)
        except ApiError as e:
            return load_failed(e)
        return view_model("accountant_dashboard", summary=asdict(summary), recent_payments=recent)

    @app.route("/menu", methods=["GET"], endpoint="menu")
    @gate
    def menu():
        items = [
            {"title": item.title, "endpoint": item.endpoint, "path": item.path}
            for item in visible_menu(auth.roles)
        ]
        return view_model("menu", items=items, user=auth.user, role=auth.role.value if auth.role else None)
