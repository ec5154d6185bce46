"""Example: call the service layer directly (no Flask).

Controllers are thin; the batch candidate suggestion lives in BatchService.
"""

import importlib
import json
import sys
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.academy_system.academy_system.container import build_container


def main():
    load_dotenv(override=False)
    batch_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    today = date.fromisoformat(sys.argv[2]) if len(sys.argv) > 2 else date.today()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    result = container.batch_service.suggest_candidates(batch_id, today=today)
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
