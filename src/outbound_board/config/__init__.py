import importlib
import os
from types import ModuleType
from typing import Optional


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "outbound_board.config.production"

    if env in {"test", "testing"}:
        return "outbound_board.config.testing"

    return "outbound_board.config.development"


def load_settings(module_name: Optional[str] = None) -> ModuleType:
    return importlib.import_module(module_name or get_settings_module())
