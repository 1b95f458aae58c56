"""Seed the demo tenant (demo@example.com / password).

Usage: DATABASE_URL=postgresql+psycopg2://... python scripts/seed_demo.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlmodel import Session  # noqa: E402

from crm.core.config import settings  # noqa: E402
from crm.db.seed import seed_demo_data  # noqa: E402
from crm.db.session import build_engine, init_db  # noqa: E402


def main() -> None:
    engine = build_engine(settings.database_url)
    init_db(engine)
    with Session(engine) as session:
        created = seed_demo_data(session)
    engine.dispose()
    print("Demo data created." if created else "Demo data already present.")


if __name__ == "__main__":
    main()
