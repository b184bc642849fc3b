from __future__ import annotations

import csv
import io
from dataclasses import asdict

import pandas as pd
from flask import Flask, request, send_file

from ..auth.web import guarded
from ..common import datetime_utils
from ..common.views import load_failed, view_model
from ..container import Container
from ..core.exceptions import ApiError, ValidationError
from .service import REPORT_COLUMNS, ReportData

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Column headers in the exported workbook
_EXPORT_HEADERS = {
    "payment_date": "Ngày nộp",
    "payment_id": "Mã phiếu",
    "so_ho_khau": "Số hộ khẩu",
    "owner_name": "Chủ hộ",
    "fee_name": "Khoản thu",
    "amount": "Số tiền phải nộp",
    "amount_paid": "Số tiền đã nộp",
    "verified": "Đã xác nhận",
    "notes": "Ghi chú",
}


def _period():
    today = datetime_utils.today()
    start_s = request.args.get("start") or today.replace(day=1).strftime("%Y-%m-%d")
    end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
    return datetime_utils.parse_iso_date(start_s), datetime_utils.parse_iso_date(end_s)


def register(app: Flask, container: Container) -> None:
    auth = container.auth_session
    gate = guarded(auth)
    svc = container.statistics_service

    def _write_report_csv(*, data: ReportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(REPORT_COLUMNS))
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _write_report_xlsx(*, data: ReportData, filename: str):
        rows = pd.DataFrame(data.rows, columns=list(REPORT_COLUMNS)).rename(columns=_EXPORT_HEADERS)
        summary = pd.DataFrame(data.summary, columns=["fee_name", "total_payments", "verified_payments", "total_collected"])
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            rows.to_excel(writer, index=False, sheet_name="NopPhi")
            summary.to_excel(writer, index=False, sheet_name="TongHop")
        out.seek(0)
        return send_file(out, download_name=filename, as_attachment=True, mimetype=XLSX_MIMETYPE)

    @app.route("/statistics", methods=["GET"], endpoint="statistics")
    @gate
    def statistics():
        try:
            start, end = _period()
            data = svc.build_payment_report(current_roles=auth.roles, start=start, end=end)
        except ValidationError as e:
            return view_model("statistics", items=[], error={"message": str(e)}), 400
        except ApiError as e:
            return load_failed(e)
        return view_model(
            "statistics",
            start=start.isoformat(),
            end=end.isoformat(),
            **asdict(data),
        )

    @app.route("/statistics/export", methods=["GET"], endpoint="statistics_export")
    @gate
    def statistics_export():
        try:
            start, end = _period()
            data = svc.build_payment_report(current_roles=auth.roles, start=start, end=end)
        except ValidationError as e:
            return view_model("statistics", items=[], error={"message": str(e)}), 400
        except ApiError as e:
            return load_failed(e)

        stem = f"bao_cao_nop_phi_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}"
        if (request.args.get("format") or "").lower() == "csv":
            return _write_report_csv(data=data, filename=f"{stem}.csv")
        return _write_report_xlsx(data=data, filename=f"{stem}.xlsx")
