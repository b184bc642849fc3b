from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..auth.web import guarded
from ..common import datetime_utils
from ..common.views import (
    HANDLED_ERRORS,
    arg_int,
    form_data,
    load_failed,
    mutation_failed,
    mutation_succeeded,
    view_model,
)
from ..container import Container
from ..core.constants import MSG_SAVE_FAILED
from ..core.enums import PaymentMethod
from ..core.exceptions import ApiError, ValidationError


def _period() -> tuple[int, int]:
    today = datetime_utils.today()
    return arg_int("month", today.month), arg_int("year", today.year)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.billing_service

    @app.route("/billing", methods=["GET"], endpoint="billing")
    @gate
    def billing():
        month, year = _period()
        try:
            summary = svc.payment_summary(current_roles=auth.roles, month=month, year=year)
        except ValidationError as e:
            return view_model("billing", items=[], error={"message": str(e)}), 400
        except ApiError as e:
            return load_failed(e)
        return view_model(
            "billing",
            items=summary.rows,
            summary={**asdict(summary), "paid_percentage": summary.paid_percentage},
        )

    @app.route("/billing/household/<int:household_id>", methods=["GET"], endpoint="billing_household")
    @gate
    def billing_household(household_id: int):
        month, year = _period()
        try:
            bill = svc.household_bill(current_roles=auth.roles, household_id=household_id, month=month, year=year)
            history = svc.list_payments(current_roles=auth.roles, household_id=household_id)
        except ValidationError as e:
            return view_model("billing_household", bill=None, error={"message": str(e)}), 400
        except ApiError as e:
            return load_failed(e)
        return view_model(
            "billing_household",
            bill={**asdict(bill), "payment_status": bill.payment_status},
            payments=history.items,
            payments_error=history.error.message if history.error else None,
        )

    @app.route("/billing/pay", methods=["POST"], endpoint="billing_pay")
    @gate
    def billing_pay():
        try:
            created = svc.record_payment(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="billing")
        return mutation_succeeded("Thanh toán phí tháng thành công", endpoint="billing", data=created)

    @app.route("/billing/<int:payment_id>/mark-paid", methods=["POST"], endpoint="billing_mark_paid")
    @gate
    def billing_mark_paid(payment_id: int):
        method = form_data().get("paymentMethod") or PaymentMethod.TIEN_MAT.value
        try:
            updated = svc.mark_paid(current_roles=auth.roles, payment_id=payment_id, method=method)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="billing")
        return mutation_succeeded("Đã ghi nhận thanh toán", endpoint="billing", data=updated)
