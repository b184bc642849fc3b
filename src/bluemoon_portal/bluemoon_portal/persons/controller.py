from __future__ import annotations

from flask import Flask, request

from ..auth.web import guarded
from ..common.views import HANDLED_ERRORS, form_data, load_failed, mutation_failed, mutation_succeeded, not_found, view_model
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_SAVE_FAILED
from ..core.exceptions import ApiError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.person_service

    @app.route("/persons", methods=["GET"], endpoint="persons")
    @gate
    def persons():
        term = request.args.get("q", "")
        result = svc.list_persons(current_roles=auth.roles, term=term)
        if result.failed:
            return load_failed(result)
        return view_model("persons", items=result.items, q=term)

    @app.route("/persons/unassigned", methods=["GET"], endpoint="persons_unassigned")
    @gate
    def persons_unassigned():
        result = svc.list_unassigned(current_roles=auth.roles)
        if result.failed:
            return load_failed(result)
        return view_model("persons_unassigned", items=result.items)

    @app.route("/persons/add", methods=["POST"], endpoint="person_add")
    @gate
    def person_add():
        try:
            created = svc.create_person(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="persons")
        return mutation_succeeded("Thêm nhân khẩu thành công", endpoint="persons", data=created)

    @app.route("/persons/<int:person_id>", methods=["GET"], endpoint="person_detail")
    @gate
    def person_detail(person_id: int):
        try:
            person = svc.get_person(current_roles=auth.roles, person_id=person_id)
        except ValidationError as e:
            return not_found(str(e))
        except ApiError as e:
            if e.status == 404:
                return not_found("Nhân khẩu không tồn tại")
            return load_failed(e)
        return view_model("person_detail", person=person)

    @app.route("/persons/edit/<int:person_id>", methods=["POST"], endpoint="person_edit")
    @gate
    def person_edit(person_id: int):
        try:
            updated = svc.update_person(current_roles=auth.roles, person_id=person_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="person_detail", person_id=person_id)
        return mutation_succeeded(
            "Cập nhật nhân khẩu thành công",
            endpoint="person_detail",
            data=updated,
            person_id=person_id,
        )

    @app.route("/persons/<int:person_id>/delete", methods=["POST"], endpoint="person_delete")
    @gate
    def person_delete(person_id: int):
        try:
            svc.delete_person(current_roles=auth.roles, person_id=person_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="persons")
        return mutation_succeeded("Đã xóa nhân khẩu", endpoint="persons")
