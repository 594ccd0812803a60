"""Settings shared by every environment module."""

import os


def _split_list(value):
    return tuple(item.strip() for item in value.split(",") if item.strip()) if value else None


def firebase_config_from_env(*, enabled_default: bool = True) -> dict:
    return {
        "project_id": os.getenv("FIREBASE_PROJECT_ID"),
        "service_account_key": os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY"),
        "service_account_key_path": os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_PATH"),
        "client_email": os.getenv("FIREBASE_CLIENT_EMAIL"),
        "private_key": os.getenv("FIREBASE_PRIVATE_KEY"),
        "collection": os.getenv("FIRESTORE_COLLECTION", "attendance"),
        "enabled": bool(int(os.getenv("FIRESTORE_ENABLED", "1" if enabled_default else "0"))),
    }


# Calendar day used for duplicate checks, date filters and exports
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")

# Form choices; comma separated lists override the built-in defaults
COMPANY_OPTIONS = _split_list(os.getenv("COMPANY_OPTIONS"))
SUPERVISOR_OPTIONS = _split_list(os.getenv("SUPERVISOR_OPTIONS"))
