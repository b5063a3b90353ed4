from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.logging import setup_logging
from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Any] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
    else:
        settings_module = getattr(settings, "__name__", type(settings).__name__)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings)
    app.extensions["shopclock"] = container

    session = container.session_service.restore()
    logger.info(
        f"settings={settings_module} backend={getattr(settings, 'STORE_BACKEND', 'file')} "
        f"namespace={container.store.namespace} signed_in={session.current_account_id is not None}"
    )

    if bool(getattr(settings, "AUTO_BACKUP_ON_START", False)):
        container.backup_service.check_and_auto_backup()

    register_accounts(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_backup(app, container)

    return app
