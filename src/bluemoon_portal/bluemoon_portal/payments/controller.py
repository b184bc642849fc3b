from __future__ import annotations

from flask import Flask, request

from ..auth.web import guarded
from ..common import datetime_utils
from ..common.views import (
    HANDLED_ERRORS,
    arg_bool,
    arg_int,
    form_data,
    load_failed,
    mutation_failed,
    mutation_succeeded,
    not_found,
    view_model,
)
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_SAVE_FAILED
from ..core.exceptions import ApiError, AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.payment_service

    def _actions() -> list[str]:
        return sorted(a.value for a in auth.permitted_actions())

    @app.route("/payments", methods=["GET"], endpoint="payments")
    @gate
    def payments():
        start = request.args.get("startDate")
        end = request.args.get("endDate")
        try:
            if start and end:
                result = svc.list_between(
                    current_roles=auth.roles,
                    start=datetime_utils.parse_iso_date(start),
                    end=datetime_utils.parse_iso_date(end),
                )
            else:
                result = svc.list_payments(
                    current_roles=auth.roles,
                    household_id=arg_int("householdId"),
                    fee_id=arg_int("feeId"),
                    unverified=arg_bool("unverified"),
                )
        except (ValidationError, AuthorizationError) as e:
            return view_model("payments", items=[], error={"message": str(e)}), 400
        if result.failed:
            return load_failed(result)
        return view_model("payments", items=result.items, actions=_actions())

    @app.route("/payments/unverified", methods=["GET"], endpoint="payments_unverified")
    @gate
    def payments_unverified():
        result = svc.list_payments(current_roles=auth.roles, unverified=True)
        if result.failed:
            return load_failed(result)
        return view_model("payments", items=result.items, unverified=True, actions=_actions())

    @app.route("/payments/add", methods=["POST"], endpoint="payment_add")
    @gate
    def payment_add():
        try:
            created = svc.create_payment(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="payments")
        return mutation_succeeded("Ghi nhận nộp phí thành công", endpoint="payments", data=created)

    @app.route("/payments/<int:payment_id>", methods=["GET"], endpoint="payment_detail")
    @gate
    def payment_detail(payment_id: int):
        try:
            payment = svc.get_payment(current_roles=auth.roles, payment_id=payment_id)
        except ValidationError as e:
            return not_found(str(e))
        except ApiError as e:
            if e.status == 404:
                return not_found("Phiếu thu không tồn tại")
            return load_failed(e)
        return view_model("payment_detail", payment=payment, actions=_actions())

    @app.route("/payments/edit/<int:payment_id>", methods=["POST"], endpoint="payment_edit")
    @gate
    def payment_edit(payment_id: int):
        try:
            updated = svc.update_payment(current_roles=auth.roles, payment_id=payment_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="payments")
        return mutation_succeeded("Cập nhật phiếu thu thành công", endpoint="payments", data=updated)

    @app.route("/payments/<int:payment_id>/verify", methods=["POST"], endpoint="payment_verify")
    @gate
    def payment_verify(payment_id: int):
        try:
            svc.set_verified(current_roles=auth.roles, payment_id=payment_id, verified=True)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="payments")
        return mutation_succeeded("Đã xác nhận phiếu thu", endpoint="payments")

    @app.route("/payments/<int:payment_id>/unverify", methods=["POST"], endpoint="payment_unverify")
    @gate
    def payment_unverify(payment_id: int):
        try:
            svc.set_verified(current_roles=auth.roles, payment_id=payment_id, verified=False)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="payments")
        return mutation_succeeded("Đã hủy xác nhận phiếu thu", endpoint="payments")

    @app.route("/payments/<int:payment_id>/delete", methods=["POST"], endpoint="payment_delete")
    @gate
    def payment_delete(payment_id: int):
        try:
            svc.delete_payment(current_roles=auth.roles, payment_id=payment_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="payments")
        return mutation_succeeded("Đã xóa phiếu thu", endpoint="payments")
