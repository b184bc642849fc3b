"""Settings for the BlueMoon portal, chosen by ``APP_ENV``.

Each environment is a plain module of upper-case names (``SECRET_KEY``,
``API_BASE_URL``, ``API_TIMEOUT``...). ``load_settings`` returns them as a
dict so the app factory never reaches into module attributes itself.
"""

import importlib
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_ENV = "development"

ENV_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "local": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    env = (os.getenv("APP_ENV") or DEFAULT_ENV).strip().lower()
    module = ENV_MODULES.get(env)
    if module is None:
        logger.warning("Unknown APP_ENV=%r, using %s settings", env, DEFAULT_ENV)
        return ENV_MODULES[DEFAULT_ENV]
    return module


def load_settings(module_name: Optional[str] = None) -> dict:
    module_name = module_name or get_settings_module()
    module = importlib.import_module(module_name)
    settings = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    if not settings.get("SECRET_KEY"):
        raise RuntimeError(f"SECRET_KEY is not set in {module_name}")
    if not settings.get("API_BASE_URL"):
        raise RuntimeError(f"API_BASE_URL is not set in {module_name}")
    settings["API_BASE_URL"] = str(settings["API_BASE_URL"]).rstrip("/")
    settings["SETTINGS_MODULE"] = module_name
    return settings
