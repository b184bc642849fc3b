import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DASHBOARD_WORKERS = int(os.getenv("DASHBOARD_WORKERS", "3"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
