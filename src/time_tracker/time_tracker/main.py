from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .common.datetime_utils import Clock
from .container import build_container


def create_app(*, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    work_day_hours = float(getattr(settings, "WORK_DAY_HOURS", 8))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    log = logging.getLogger("time_tracker")
    log.info("settings=%s work_day_hours=%s", settings_module, work_day_hours)

    container = build_container(work_day_hours=work_day_hours, clock=clock)

    register_api(app, container)

    return app
