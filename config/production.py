import os

from config.config import COMPANY_OPTIONS, REPORT_TIMEZONE, SUPERVISOR_OPTIONS, firebase_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

FIREBASE_CONFIG = firebase_config_from_env()

DEBUG = False

