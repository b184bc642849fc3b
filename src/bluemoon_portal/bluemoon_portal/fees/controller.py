from __future__ import annotations

import logging

from flask import Flask, request

from ..auth.web import guarded
from ..common.validators import parse_flag
from ..common.views import HANDLED_ERRORS, form_data, load_failed, mutation_failed, mutation_succeeded, not_found, view_model
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_PENDING_APPROVAL, MSG_SAVE_FAILED
from ..core.enums import FeeType
from ..core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.fee_service

    def _actions() -> list[str]:
        return sorted(a.value for a in auth.permitted_actions())

    @app.route("/fees", methods=["GET"], endpoint="fees")
    @gate
    def fees():
        raw_type = (request.args.get("type") or "").strip().upper()
        fee_type = FeeType(raw_type) if raw_type in FeeType.__members__ else None
        result = svc.list_fees(current_roles=auth.roles, fee_type=fee_type)
        if result.failed:
            return load_failed(result)
        return view_model("fees", items=result.items, type=fee_type.value if fee_type else None, actions=_actions())

    @app.route("/fees/add", methods=["POST"], endpoint="fee_add")
    @gate
    def fee_add():
        try:
            created = svc.create_fee(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="fees")
        message = "Thêm khoản thu thành công"
        if created and not created.get("active"):
            message = f"{message} ({MSG_PENDING_APPROVAL})"
        return mutation_succeeded(message, endpoint="fees", data=created)

    @app.route("/fees/detail/<int:fee_id>", methods=["GET"], endpoint="fee_detail")
    @gate
    def fee_detail(fee_id: int):
        try:
            fee = svc.get_fee(current_roles=auth.roles, fee_id=fee_id)
        except ValidationError as e:
            return not_found(str(e))
        except ApiError as e:
            if e.status == 404:
                return not_found("Khoản thu không tồn tại")
            return load_failed(e)

        statistics = None
        paid = None
        try:
            statistics = svc.statistics(current_roles=auth.roles, fee_id=fee_id)
            paid = svc.paid_households(current_roles=auth.roles, fee_id=fee_id)
        except ApiError as e:
            logger.warning("Fee %s statistics unavailable: %s", fee_id, e)
        return view_model("fee_detail", fee=fee, statistics=statistics, paid=paid, actions=_actions())

    @app.route("/fees/edit/<int:fee_id>", methods=["POST"], endpoint="fee_edit")
    @gate
    def fee_edit(fee_id: int):
        try:
            updated = svc.update_fee(current_roles=auth.roles, fee_id=fee_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="fees")
        return mutation_succeeded("Cập nhật khoản thu thành công", endpoint="fees", data=updated)

    @app.route("/fees/<int:fee_id>/status", methods=["POST"], endpoint="fee_toggle_status")
    @gate
    def fee_toggle_status(fee_id: int):
        active = parse_flag(form_data().get("active"))
        try:
            svc.toggle_status(current_roles=auth.roles, fee_id=fee_id, active=active)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="fees")
        message = "Đã kích hoạt khoản thu" if active else "Đã ngừng khoản thu"
        return mutation_succeeded(message, endpoint="fees")

    @app.route("/fees/<int:fee_id>/delete", methods=["POST"], endpoint="fee_delete")
    @gate
    def fee_delete(fee_id: int):
        try:
            svc.delete_fee(current_roles=auth.roles, fee_id=fee_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="fees")
        return mutation_succeeded("Đã xóa khoản thu", endpoint="fees")
