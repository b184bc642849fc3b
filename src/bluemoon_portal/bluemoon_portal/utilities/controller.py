from __future__ import annotations

from flask import Flask

from ..auth.web import guarded
from ..common.validators import parse_flag
from ..common.views import (
    HANDLED_ERRORS,
    arg_bool,
    arg_int,
    form_data,
    load_failed,
    mutation_failed,
    mutation_succeeded,
    view_model,
)
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_SAVE_FAILED
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.utility_service

    @app.route("/utilities", methods=["GET"], endpoint="utilities")
    @gate
    def utilities():
        try:
            result = svc.list_bills(
                current_roles=auth.roles,
                household_id=arg_int("householdId"),
                month=arg_int("month"),
                year=arg_int("year"),
                unpaid=arg_bool("unpaid"),
            )
        except ValidationError as e:
            return view_model("utilities", items=[], error={"message": str(e)}), 400
        if result.failed:
            return load_failed(result)
        return view_model("utilities", items=result.items, total=svc.total_cost(result.items))

    @app.route("/utilities/add", methods=["POST"], endpoint="utility_add")
    @gate
    def utility_add():
        try:
            created = svc.create_bill(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="utilities")
        return mutation_succeeded("Thêm hoá đơn dịch vụ thành công", endpoint="utilities", data=created)

    @app.route("/utilities/edit/<int:bill_id>", methods=["POST"], endpoint="utility_edit")
    @gate
    def utility_edit(bill_id: int):
        data = form_data()
        try:
            if set(data) == {"paid"}:
                svc.set_paid(current_roles=auth.roles, bill_id=bill_id, paid=parse_flag(data["paid"]))
                updated = None
            else:
                updated = svc.update_bill(current_roles=auth.roles, bill_id=bill_id, data=data)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="utilities")
        return mutation_succeeded("Cập nhật hoá đơn dịch vụ thành công", endpoint="utilities", data=updated)

    @app.route("/utilities/<int:bill_id>/delete", methods=["POST"], endpoint="utility_delete")
    @gate
    def utility_delete(bill_id: int):
        try:
            svc.delete_bill(current_roles=auth.roles, bill_id=bill_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="utilities")
        return mutation_succeeded("Đã xóa hoá đơn dịch vụ", endpoint="utilities")
