from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..core.exceptions import PersistenceError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/backup", methods=["GET"], endpoint="backup_export")
    def backup_export():
        payload = container.backup_service.export_backup()
        selected = container.attendance_service.get_selected_date()
        return send_file(
            io.BytesIO(payload.encode("utf-8")),
            mimetype="application/json",
            as_attachment=True,
            download_name=f"attendance_backup_{selected}.json",
        )

    @app.route("/api/backup", methods=["POST"], endpoint="backup_import")
    def backup_import():
        upload = request.files.get("file")
        payload = upload.read() if upload else request.get_data()
        try:
            result = container.backup_service.import_backup(payload)
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500

        if not result.ok:
            return jsonify({"success": False, "error": result.error.value, "message": result.message}), 400
        return jsonify(
            {
                "success": True,
                "message": "Backup restored",
                "selectedDate": container.attendance_service.get_selected_date(),
            }
        )
