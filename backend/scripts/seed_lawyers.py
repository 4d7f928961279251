import os
import sys
import json
import argparse
import logging

from dotenv import load_dotenv

from aboga.core.config import BackendConfig
from aboga.core.database import build_session_factory, create_database_engine, create_tables
from aboga.services.lawyer_directory import seed_lawyers

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEFAULT_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "lawyers_sample.json")

# ---- Logging ----
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("seed")


def main():
    parser = argparse.ArgumentParser(description="Seed the lawyer directory of the SQL backend")
    parser.add_argument("--file", type=str, default=DEFAULT_FILE, help="JSON file with a list of lawyers")
    parser.add_argument("--database-url", type=str, default=None, help="Overrides DATABASE_URL")
    parser.add_argument("--refresh", action="store_true", help="Delete existing lawyers before seeding")
    args = parser.parse_args()

    config = BackendConfig(data_backend="sql")
    if args.database_url:
        config = BackendConfig(data_backend="sql", database_url=args.database_url)

    with open(args.file, encoding="utf-8") as fh:
        lawyers = json.load(fh)
    logger.info(f"Loaded {len(lawyers)} lawyers from {args.file}")

    engine = create_database_engine(config)
    try:
        create_tables(engine)
        inserted = seed_lawyers(build_session_factory(engine), lawyers, refresh=args.refresh)
        logger.info(f"Seeding complete: {inserted} new lawyers")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
