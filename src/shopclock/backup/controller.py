from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import owner_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    backups = container.backup_service
    owner_only = owner_required(container.owner_auth_service)

    def _outcome(outcome):
        body = {"ok": outcome.ok, "message": outcome.message, "file": outcome.path.name if outcome.path else None}
        return jsonify(body), 200 if outcome.ok else 500

    @app.route("/api/backup", methods=["POST"], endpoint="backup_now")
    @owner_only
    def backup_now():
        return _outcome(backups.backup())

    @app.route("/api/restore", methods=["POST"], endpoint="restore_latest")
    @owner_only
    def restore_latest():
        outcome = backups.restore_latest()
        if not outcome.ok and outcome.path is None:
            return jsonify({"ok": False, "message": outcome.message, "file": None}), 404
        return _outcome(outcome)
