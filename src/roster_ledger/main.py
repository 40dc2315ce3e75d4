from __future__ import annotations

import importlib
import logging
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .container import build_container
from .roster.controller import register as register_roster
from .roster.model import SeedEntry
from .storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def load_settings(settings_module: Optional[str] = None) -> Any:
    return importlib.import_module(settings_module or get_settings_module())


def create_app(
    settings_module: Optional[str] = None,
    *,
    kv: Optional[KeyValueStore] = None,
    seed: Optional[Sequence[SeedEntry]] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings=settings, kv=kv, seed=seed)
    container.state.load()
    result = container.reconciler.run()
    logger.info(
        "Startup: backend=%s schema=%s roster=%d",
        getattr(settings, "STORE_BACKEND", "memory"),
        result.schema_version,
        len(result.roster),
    )

    app.extensions["roster_ledger"] = container

    register_roster(app, container)
    register_attendance(app, container)
    register_backup(app, container)

    return app
