"""
Apply the SQL migrations in this directory.

Usage:
    python -m migrations.apply

Requires SUPABASE_URL and SUPABASE_SERVICE_KEY (environment or .env) and an
``exec_sql`` RPC function in the database. When the RPC is missing, run the
files manually in the Supabase SQL editor.
"""
import logging
import sys
from pathlib import Path

from app.core.logging import setup_logging
from app.services.supabase import get_supabase_client

logger = logging.getLogger("migrations")

MIGRATIONS_DIR = Path(__file__).parent

MIGRATIONS = [
    "001_campaign_schema.sql",
]


def apply_migrations() -> bool:
    """Apply every migration in order. Returns False on the first failure."""
    supabase = get_supabase_client()

    for migration_file in MIGRATIONS:
        path = MIGRATIONS_DIR / migration_file
        if not path.exists():
            logger.warning(f"[SKIP] {migration_file} not found")
            continue

        logger.info(f"[APPLY] {migration_file}")
        try:
            supabase.rpc("exec_sql", {"sql": path.read_text()}).execute()
        except Exception as e:
            logger.error(f"[ERROR] {migration_file}: {e}")
            return False
        logger.info(f"[OK] {migration_file}")

    return True


if __name__ == "__main__":
    setup_logging()
    if not apply_migrations():
        logger.error("Run the remaining files manually in the Supabase SQL editor")
        sys.exit(1)
