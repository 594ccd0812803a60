import os

from config.config import COMPANY_OPTIONS, REPORT_TIMEZONE, SUPERVISOR_OPTIONS, firebase_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

FIREBASE_CONFIG = firebase_config_from_env()

DEBUG = True

