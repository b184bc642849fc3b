from __future__ import annotations

from flask import Flask, request

from ..auth.web import guarded
from ..common.views import HANDLED_ERRORS, arg_int, form_data, load_failed, mutation_failed, mutation_succeeded, view_model
from ..container import Container
from ..core.constants import MSG_DELETE_FAILED, MSG_SAVE_FAILED
from ..core.exceptions import ApiError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.vehicle_service

    @app.route("/vehicles", methods=["GET"], endpoint="vehicles")
    @gate
    def vehicles():
        household_id = arg_int("householdId")
        try:
            result = svc.list_vehicles(
                current_roles=auth.roles,
                household_id=household_id,
                term=request.args.get("q", ""),
            )
        except ValidationError as e:
            return view_model("vehicles", items=[], error={"message": str(e)}), 400
        if result.failed:
            return load_failed(result)

        parking_fee = None
        if household_id is not None:
            try:
                parking_fee = svc.monthly_parking_fee(current_roles=auth.roles, household_id=household_id)
            except ApiError as e:
                return load_failed(e)
        return view_model("vehicles", items=result.items, household_id=household_id, monthly_parking_fee=parking_fee)

    @app.route("/vehicles/add", methods=["POST"], endpoint="vehicle_add")
    @gate
    def vehicle_add():
        try:
            created = svc.create_vehicle(current_roles=auth.roles, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="vehicles")
        return mutation_succeeded("Đăng ký phương tiện thành công", endpoint="vehicles", data=created)

    @app.route("/vehicles/edit/<int:vehicle_id>", methods=["POST"], endpoint="vehicle_edit")
    @gate
    def vehicle_edit(vehicle_id: int):
        try:
            updated = svc.update_vehicle(current_roles=auth.roles, vehicle_id=vehicle_id, data=form_data())
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_SAVE_FAILED, endpoint="vehicles")
        return mutation_succeeded("Cập nhật phương tiện thành công", endpoint="vehicles", data=updated)

    @app.route("/vehicles/<int:vehicle_id>/delete", methods=["POST"], endpoint="vehicle_delete")
    @gate
    def vehicle_delete(vehicle_id: int):
        try:
            svc.delete_vehicle(current_roles=auth.roles, vehicle_id=vehicle_id)
        except HANDLED_ERRORS as e:
            return mutation_failed(e, fallback=MSG_DELETE_FAILED, endpoint="vehicles")
        return mutation_succeeded("Đã xóa phương tiện", endpoint="vehicles")
