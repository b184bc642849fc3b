from __future__ import annotations

from flask import Flask, request

from ..auth.web import guarded
from ..common.views import (
    HANDLED_ERRORS,
    arg_bool,
    form_data,
    load_failed,
    mutation_failed,
    mutation_succeeded,
    not_found,
    view_model,
)
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_PENDING_APPROVAL, MSG_SAVE_FAILED
from ..core.exceptions import ApiError, AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.household_service

    def _actions() -> list[str]:
        return sorted(a.value for a in auth.permitted_actions())

    @app.route("/households", methods=["GET"], endpoint="households")
    @gate
    def households():
        keyword = (request.args.get("q") or "").strip()
        try:
            if keyword:
                result = svc.search(current_roles=auth.roles, keyword=keyword)
            else:
                result = svc.list_households(current_roles=auth.roles, show_all=arg_bool("showAll"))
        except (ValidationError, AuthorizationError) as e:
            return view_model("households", items=[], error={"message": str(e)}), 400
        if result.failed:
            return load_failed(result)
        return view_model("households", items=result.items, q=keyword, actions=_actions())

    @app.route("/households/add", methods=["POST"], endpoint="household_add")
    @gate
    def household_add():
        try:
            created = svc.create_household(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="households")
        message = "Thêm hộ khẩu thành công"
        if created and not created.get("active"):
            message = f"{message} ({MSG_PENDING_APPROVAL})"
        return mutation_succeeded(message, endpoint="households", data=created)

    @app.route("/households/<int:household_id>", methods=["GET"], endpoint="household_detail")
    @gate
    def household_detail(household_id: int):
        try:
            household = svc.get_household(current_roles=auth.roles, household_id=household_id)
        except ValidationError as e:
            return not_found(str(e))
        except ApiError as e:
            if e.status == 404:
                return not_found("Hộ khẩu không tồn tại")
            return load_failed(e)

        members = svc.list_members(current_roles=auth.roles, household_id=household_id)
        return view_model(
            "household_detail",
            household=household,
            members=members.items,
            members_error=members.error.message if members.error else None,
            actions=_actions(),
        )

    @app.route("/households/edit/<int:household_id>", methods=["POST"], endpoint="household_edit")
    @gate
    def household_edit(household_id: int):
        try:
            updated = svc.update_household(current_roles=auth.roles, household_id=household_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="household_detail", household_id=household_id)
        return mutation_succeeded(
            "Cập nhật hộ khẩu thành công",
            endpoint="household_detail",
            data=updated,
            household_id=household_id,
        )

    @app.route("/households/<int:household_id>/delete", methods=["POST"], endpoint="household_delete")
    @gate
    def household_delete(household_id: int):
        try:
            svc.delete_household(current_roles=auth.roles, household_id=household_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="households")
        return mutation_succeeded("Đã xóa hộ khẩu", endpoint="households")

    @app.route("/households/<int:household_id>/activate", methods=["POST"], endpoint="household_activate")
    @gate
    def household_activate(household_id: int):
        try:
            svc.activate_household(current_roles=auth.roles, household_id=household_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="households")
        return mutation_succeeded("Đã kích hoạt hộ khẩu", endpoint="households")

    @app.route("/households/<int:household_id>/members", methods=["GET"], endpoint="household_members")
    @gate
    def household_members(household_id: int):
        result = svc.list_members(current_roles=auth.roles, household_id=household_id)
        if result.failed:
            return load_failed(result)
        return view_model("household_members", household_id=household_id, items=result.items)

    @app.route("/households/<int:household_id>/members", methods=["POST"], endpoint="household_member_add")
    @gate
    def household_member_add(household_id: int):
        data = form_data()
        try:
            svc.add_member(
                current_roles=auth.roles,
                household_id=household_id,
                person_id=data.get("personId"),
                relationship=str(data.get("relationshipWithOwner", "")),
                notes=str(data.get("notes", "")),
            )
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="household_detail", household_id=household_id)
        return mutation_succeeded(
            "Đã thêm nhân khẩu vào hộ",
            endpoint="household_detail",
            household_id=household_id,
        )

    @app.route(
        "/households/<int:household_id>/members/<int:person_id>/remove",
        methods=["POST"],
        endpoint="household_member_remove",
    )
    @gate
    def household_member_remove(household_id: int, person_id: int):
        try:
            svc.remove_member(
                current_roles=auth.roles,
                household_id=household_id,
                person_id=person_id,
                notes=str(form_data().get("notes", "")),
            )
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="household_detail", household_id=household_id)
        return mutation_succeeded(
            "Đã chuyển nhân khẩu ra khỏi hộ",
            endpoint="household_detail",
            household_id=household_id,
        )

    @app.route("/households/<int:household_id>/history", methods=["GET"], endpoint="household_history")
    @gate
    def household_history(household_id: int):
        result = svc.history(current_roles=auth.roles, household_id=household_id)
        if result.failed:
            return load_failed(result)
        return view_model("household_history", household_id=household_id, items=result.items)
