from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_calculations
from .container import Container, build_container
from .database.memory_store import InMemoryRecordStore

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = _container_from_settings(settings)

    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info(
        "attendance-analytics settings=%s store=%s db=%s@%s:%s/%s",
        settings_module,
        getattr(settings, "RECORD_STORE", "mysql"),
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    register_calculations(app, container)
    return app


def _container_from_settings(settings) -> Container:
    max_workers = int(getattr(settings, "ANALYTICS_MAX_WORKERS", 0))
    data_source = getattr(settings, "DATA_SOURCE", "attendance-calculations")

    if getattr(settings, "RECORD_STORE", "mysql") == "memory":
        return build_container(store=InMemoryRecordStore(), max_workers=max_workers, data_source=data_source)
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        max_workers=max_workers,
        data_source=data_source,
    )
