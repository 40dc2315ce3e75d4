from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/roster", methods=["GET"], endpoint="roster_list")
    def roster_list():
        sort = request.args.get("sort", "")
        entities = (
            container.roster_service.list_sorted()
            if sort == "roll"
            else container.roster_service.list_entities()
        )
        return jsonify({"success": True, "roster": [e.to_dict() for e in entities]})

    @app.route("/api/roster", methods=["POST"], endpoint="roster_add")
    def roster_add():
        data = request.get_json(silent=True) or {}
        try:
            entity = container.roster_service.add_entity(
                name=data.get("name", ""),
                roll_label=data.get("rollLabel", ""),
                photo_ref=data.get("photoRef"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "entity": entity.to_dict()}), 201

    @app.route("/api/roster/<entity_id>", methods=["DELETE"], endpoint="roster_remove")
    def roster_remove(entity_id: str):
        try:
            entity = container.roster_service.remove_entity(entity_id)
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError as e:
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "entity": entity.to_dict()})
