from __future__ import annotations

from flask import Flask

from ..auth.web import guarded
from ..common.views import HANDLED_ERRORS, form_data, load_failed, mutation_failed, mutation_succeeded, view_model
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_SAVE_FAILED


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.user_service

    @app.route("/users", methods=["GET"], endpoint="users")
    @gate
    def users():
        result = svc.list_users(current_roles=auth.roles)
        if result.failed:
            return load_failed(result)
        return view_model("users", items=result.items)

    @app.route("/users/add", methods=["POST"], endpoint="user_add")
    @gate
    def user_add():
        try:
            created = svc.create_user(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="users")
        return mutation_succeeded("Tạo tài khoản thành công", endpoint="users", data=created)

    @app.route("/users/edit/<int:user_id>", methods=["POST"], endpoint="user_edit")
    @gate
    def user_edit(user_id: int):
        try:
            updated = svc.update_user(current_roles=auth.roles, user_id=user_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="users")
        return mutation_succeeded("Cập nhật tài khoản thành công", endpoint="users", data=updated)

    @app.route("/users/<int:user_id>/delete", methods=["POST"], endpoint="user_delete")
    @gate
    def user_delete(user_id: int):
        try:
            svc.delete_user(
                current_roles=auth.roles,
                user_id=user_id,
                current_username=str(auth.user.get("username") or ""),
            )
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="users")
        return mutation_succeeded("Đã xóa tài khoản", endpoint="users")
