import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# BlueMoon REST server
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Parallel loads per dashboard request
DASHBOARD_WORKERS = int(os.getenv("DASHBOARD_WORKERS", "3"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
