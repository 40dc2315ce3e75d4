from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import to_iso_date
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..container import Container
from ..reports.service import report_to_csv


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/<work_date>", methods=["GET"], endpoint="attendance_day")
    def attendance_day(work_date: str):
        try:
            day = to_iso_date(work_date)
            marks = svc.marks_for(work_date)
            stats = svc.stats_for_date(work_date)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify(
            {
                "success": True,
                "date": day,
                "marks": {eid: status.value for eid, status in marks.items()},
                "stats": stats.to_dict(),
            }
        )

    @app.route("/api/attendance/<work_date>/<entity_id>", methods=["PUT"], endpoint="attendance_mark")
    def attendance_mark(work_date: str, entity_id: str):
        data = request.get_json(silent=True) or {}
        try:
            status = svc.mark(work_date, entity_id, data.get("status"))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "status": status.value, "stats": svc.stats_for_date(work_date).to_dict()})

    @app.route("/api/attendance/<work_date>/<entity_id>", methods=["DELETE"], endpoint="attendance_unmark")
    def attendance_unmark(work_date: str, entity_id: str):
        try:
            cleared = svc.unmark(work_date, entity_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "cleared": cleared})

    @app.route("/api/attendance/<work_date>/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats(work_date: str):
        try:
            stats = svc.stats_for_date(work_date)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "stats": stats.to_dict()})

    @app.route("/api/attendance/<work_date>/next", methods=["GET"], endpoint="attendance_next")
    def attendance_next(work_date: str):
        try:
            entity = svc.next_unmarked(work_date, after_id=request.args.get("after"))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "entity": entity.to_dict() if entity else None})

    @app.route("/api/attendance/<work_date>/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    def attendance_report_csv(work_date: str):
        try:
            report = container.report_service.build(work_date)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return Response(
            report_to_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{report.work_date}.csv"},
        )

    @app.route("/api/selected-date", methods=["GET"], endpoint="selected_date_get")
    def selected_date_get():
        return jsonify({"success": True, "selectedDate": svc.get_selected_date()})

    @app.route("/api/selected-date", methods=["PUT"], endpoint="selected_date_set")
    def selected_date_set():
        data = request.get_json(silent=True) or {}
        try:
            day = svc.set_selected_date(data.get("selectedDate", ""))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "selectedDate": day})
