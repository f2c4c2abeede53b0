from __future__ import annotations

import logging
import os
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .board.controller import register as register_board
from .config import get_settings_module, load_settings
from .container import Container, build_container

logger = logging.getLogger(__name__)


def create_app(settings: Optional[ModuleType] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = settings or load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = container or build_container(settings)
    app.extensions["outbound_board"] = container

    logger.info(
        "settings=%s store=%s",
        getattr(settings, "__name__", get_settings_module()),
        getattr(settings, "STORE_BACKEND", "memory"),
    )

    register_board(app, container)

    if bool(getattr(settings, "TICKER_ENABLED", True)):
        container.ticker.start()

    return app


def run() -> None:
    app = create_app()
    port = int(os.getenv("PORT", "3000"))
    app.run(host=os.getenv("HOST", "0.0.0.0"), port=port, threaded=True)


if __name__ == "__main__":
    run()
