"""Backup attendance records.

Run from the repository root: `python -m scripts.backup`.

Note: Reads through the same gateway as the API, so a fresh process with an
unreachable Firestore produces an empty backup (the fallback store is empty).
"""

from __future__ import annotations

import importlib
import json
from datetime import datetime
from pathlib import Path

from config import get_settings_module

from src.attendance_checkin.attendance_checkin.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        firebase_config=dict(settings.FIREBASE_CONFIG),
        report_timezone=settings.REPORT_TIMEZONE,
    )

    records = container.gateway.list_all()

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_{ts}.json"
    with out_file.open("w", encoding="utf-8") as f:
        json.dump([r.to_json() for r in records], f, ensure_ascii=False, indent=2)

    print(f"OK: Backup created: {out_file} ({len(records)} records)")


if __name__ == "__main__":
    main()
