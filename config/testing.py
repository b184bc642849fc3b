import os

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://bluemoon.test/api")
API_TIMEOUT = 2

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DASHBOARD_WORKERS = 2
SESSION_DAYS = 7
