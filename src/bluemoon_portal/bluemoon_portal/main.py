from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import load_settings

from .common.log_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_API_TIMEOUT, DEFAULT_DASHBOARD_WORKERS, DEFAULT_SESSION_DAYS
from .auth.controller import register as register_auth
from .billing.controller import register as register_billing
from .dashboard.controller import register as register_dashboard
from .fees.controller import register as register_fees
from .households.controller import register as register_households
from .payments.controller import register as register_payments
from .persons.controller import register as register_persons
from .residence.controller import register as register_residence
from .statistics.controller import register as register_statistics
from .users.controller import register as register_users
from .utilities.controller import register as register_utilities
from .vehicles.controller import register as register_vehicles

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings()
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["API_BASE_URL"] = settings["API_BASE_URL"]
    app.permanent_session_lifetime = timedelta(days=int(settings.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(settings.get("LOG_LEVEL", "INFO"), logger_name=__name__.rsplit(".", 1)[0])
    logger.info("Starting portal with settings=%s api=%s", settings["SETTINGS_MODULE"], app.config["API_BASE_URL"])

    if container is None:
        container = build_container(
            api_base_url=app.config["API_BASE_URL"],
            api_timeout=float(settings.get("API_TIMEOUT", DEFAULT_API_TIMEOUT)),
            dashboard_workers=int(settings.get("DASHBOARD_WORKERS", DEFAULT_DASHBOARD_WORKERS)),
        )

    register_auth(app, container)
    register_dashboard(app, container)
    register_households(app, container)
    register_persons(app, container)
    register_residence(app, container)
    register_vehicles(app, container)
    register_utilities(app, container)
    register_fees(app, container)
    register_payments(app, container)
    register_billing(app, container)
    register_statistics(app, container)
    register_users(app, container)

    return app
