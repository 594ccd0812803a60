from config.config import COMPANY_OPTIONS, SUPERVISOR_OPTIONS, firebase_config_from_env

SECRET_KEY = "test-secret"

# Tests never reach Firestore unless FIRESTORE_ENABLED=1 is exported explicitly
FIREBASE_CONFIG = firebase_config_from_env(enabled_default=False)

REPORT_TIMEZONE = "UTC"

DEBUG = False
TESTING = True

