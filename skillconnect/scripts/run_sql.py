"""
Run a SQL provisioning file (tables, triggers, policies) against DATABASE_URL.
Usage: python -m skillconnect.scripts.run_sql sql/setup.sql
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from skillconnect.database import engine
from skillconnect.logging_config import setup_logging
from skillconnect.services.sql_runner import run_sql_file


def main(argv: list[str] | None = None):
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage: python -m skillconnect.scripts.run_sql <file.sql>")
        sys.exit(1)
    path = Path(args[0])
    if not path.is_file():
        print(f"SQL file not found: {path}")
        sys.exit(1)
    setup_logging()
    try:
        count = run_sql_file(engine, path)
    except Exception as e:
        print(f"Failed: {e}")
        sys.exit(1)
    print(f"Executed {count} statements from {path}.")


if __name__ == "__main__":
    main()
