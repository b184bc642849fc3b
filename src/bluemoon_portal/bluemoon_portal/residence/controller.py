from __future__ import annotations

from flask import Flask

from ..auth.web import guarded
from ..common.views import (
    HANDLED_ERRORS,
    arg_int,
    form_data,
    load_failed,
    mutation_failed,
    mutation_succeeded,
    not_found,
    view_model,
)
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE, MSG_DELETE_FAILED, MSG_SAVE_FAILED
from ..core.exceptions import ApiError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.residence_service

    @app.route("/temporary-residence", methods=["GET"], endpoint="temporary_residence")
    @gate
    def temporary_residence():
        page = arg_int("page", 0)
        size = arg_int("size", DEFAULT_PAGE_SIZE)
        try:
            result = svc.list_records(
                current_roles=auth.roles,
                person_id=arg_int("personId"),
                page=page,
                size=size,
            )
        except ValidationError as e:
            return view_model("temporary_residence", items=[], error={"message": str(e)}), 400
        if result.failed:
            return load_failed(result)
        return view_model("temporary_residence", items=result.items, page=page, size=size)

    @app.route("/temporary-residence/add", methods=["POST"], endpoint="temporary_residence_add")
    @gate
    def temporary_residence_add():
        try:
            created = svc.create_record(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="temporary_residence")
        return mutation_succeeded("Đăng ký tạm trú/tạm vắng thành công", endpoint="temporary_residence", data=created)

    @app.route("/temporary-residence/<int:record_id>", methods=["GET"], endpoint="temporary_residence_detail")
    @gate
    def temporary_residence_detail(record_id: int):
        try:
            record = svc.get_record(current_roles=auth.roles, record_id=record_id)
        except ValidationError as e:
            return not_found(str(e))
        except ApiError as e:
            if e.status == 404:
                return not_found("Bản ghi tạm trú/tạm vắng không tồn tại")
            return load_failed(e)
        return view_model("temporary_residence_detail", record=record)

    @app.route("/temporary-residence/edit/<int:record_id>", methods=["POST"], endpoint="temporary_residence_edit")
    @gate
    def temporary_residence_edit(record_id: int):
        try:
            updated = svc.update_record(current_roles=auth.roles, record_id=record_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="temporary_residence")
        return mutation_succeeded("Cập nhật tạm trú/tạm vắng thành công", endpoint="temporary_residence", data=updated)

    @app.route("/temporary-residence/<int:record_id>/delete", methods=["POST"], endpoint="temporary_residence_delete")
    @gate
    def temporary_residence_delete(record_id: int):
        try:
            svc.delete_record(current_roles=auth.roles, record_id=record_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="temporary_residence")
        return mutation_succeeded("Đã xóa bản ghi tạm trú/tạm vắng", endpoint="temporary_residence")
