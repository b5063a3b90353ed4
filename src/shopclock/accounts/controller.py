from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import OWNER_SESSION_FLAG, json_body, register_error_handlers
from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError


def register(app: Flask, container: Container) -> None:
    register_error_handlers(app)

    def _session_view():
        current = container.session_service.current
        return {
            "account_id": current.current_account_id,
            "namespace": container.store.namespace,
            "last_auto_backup": current.last_auto_backup.isoformat() if current.last_auto_backup else None,
        }

    @app.route("/api/session", methods=["GET"], endpoint="session_info")
    def session_info():
        return jsonify(_session_view())

    @app.route("/api/session/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        data = json_body()
        account_id = str(data.get("account_id", ""))
        password = data.get("password")

        if password is not None:
            container.session_service.sign_in_local(account_id, str(password))
        elif data.get("federated"):
            container.session_service.sign_in(account_id, federated=True)
        else:
            raise ValidationError("password or federated sign-in required")

        session.pop(OWNER_SESSION_FLAG, None)
        return jsonify(_session_view())

    @app.route("/api/session/sign-out", methods=["POST"], endpoint="sign_out")
    def sign_out():
        container.session_service.sign_out()
        session.clear()
        return jsonify(_session_view())

    @app.route("/api/accounts", methods=["POST"], endpoint="register_account")
    def register_account():
        data = json_body()
        account_id = container.local_account_service.register(
            str(data.get("account_id", "")), str(data.get("password", ""))
        )
        return jsonify({"account_id": account_id}), 201

    @app.route("/api/owner/password", methods=["POST"], endpoint="owner_set_password")
    def owner_set_password():
        data = json_body()
        owner = container.owner_auth_service
        if owner.has_password() and not owner.verify(str(data.get("current_password", ""))):
            raise AuthenticationError("Wrong owner password")
        owner.set_password(str(data.get("password", "")))
        session[OWNER_SESSION_FLAG] = True
        return jsonify({"ok": True})

    @app.route("/api/owner/verify", methods=["POST"], endpoint="owner_verify")
    def owner_verify():
        container.owner_auth_service.require(str(json_body().get("password", "")))
        session[OWNER_SESSION_FLAG] = True
        return jsonify({"ok": True})
