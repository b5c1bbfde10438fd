"""
SQL migration runner for databases created before a schema change
Usage: python run_migration.py migrations/<file>.sql [more.sql ...]
"""
import logging
import sys
from pathlib import Path

from sqlalchemy import text

from smartair.database import engine

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def split_statements(sql: str) -> list[str]:
    """Split a script on ';', dropping comment lines and empty statements"""
    lines = [line for line in sql.splitlines() if not line.strip().startswith('--')]
    return [s.strip() for s in '\n'.join(lines).split(';') if s.strip()]


def run_migration(migration_file_path: str) -> int:
    migration_file = Path(migration_file_path)
    if not migration_file.exists():
        raise FileNotFoundError(f"Migration file not found: {migration_file}")

    logger.info(f"📄 Reading migration file: {migration_file}")
    statements = split_statements(migration_file.read_text())
    logger.info(f"Found {len(statements)} SQL statements to execute")

    # One transaction per file so a failed statement leaves the schema untouched
    with engine.begin() as conn:
        for i, stmt in enumerate(statements, 1):
            logger.info(f"Executing statement {i}/{len(statements)}...")
            conn.execute(text(stmt))

    logger.info(f"✅ {migration_file.name} applied")
    return len(statements)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        logger.error("Usage: python run_migration.py <migration_file.sql> [...]")
        sys.exit(1)

    for path in sys.argv[1:]:
        try:
            run_migration(path)
        except Exception as e:
            logger.error(f"❌ Migration {path} failed: {e}")
            sys.exit(1)
