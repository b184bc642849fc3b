from __future__ import annotations

import logging

from flask import Flask, flash, redirect, request, session, url_for

from ..common.validators import parse_flag
from ..common.views import form_data, view_model, wants_json
from ..container import Container
from ..core.exceptions import ApiError, AuthenticationError, ValidationError
from .guard import home_endpoint
from .web import guarded

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)

    @app.route("/", methods=["GET"], endpoint="index")
    @gate
    def index():
        # gate always redirects: home view or login
        return redirect(url_for(home_endpoint(auth.roles)))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    @gate
    def login():
        if request.method == "POST":
            data = form_data()
            try:
                if data.get("token"):
                    credential = container.auth_service.from_token(str(data["token"]))
                else:
                    credential = container.auth_service.login(
                        str(data.get("username", "")),
                        str(data.get("password", "")),
                    )
                auth.login(credential)
                session.permanent = parse_flag(data.get("remember_me"))

                home = home_endpoint(auth.roles)
                if wants_json():
                    return view_model("login", success=True, redirect=url_for(home), role=auth.role.value if auth.role else None)
                flash("Đăng nhập thành công!", "success")
                return redirect(url_for(home))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except ApiError as e:
                logger.error("Login request failed: %s", e)
                if bool(app.config.get("DEBUG", False)):
                    flash(f"Lỗi hệ thống khi đăng nhập: {e}", "danger")
                else:
                    flash("Lỗi hệ thống khi đăng nhập", "danger")

            if wants_json():
                return view_model("login", success=False), 401

        return view_model("login", fields=["username", "password", "remember_me"])

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        auth.logout()
        flash("Đã đăng xuất hệ thống.", "info")
        return redirect(url_for("login"))
