#!/usr/bin/env python3
"""
Create the news-curator tables.

Usage:
    python scripts/init_db.py [--config config/news_curator.yaml] [--db-path data/dev.db] [--drop]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import inspect

from news_curator.config import get_config, reload_config
from news_curator.logger import setup_logger
from news_curator.storage.database import DatabaseManager


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the news-curator database tables")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--db-path", help="SQLite file to use instead of the configured database")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first (data is lost)")
    args = parser.parse_args()

    if args.config:
        reload_config(args.config)
    setup_logger(config=get_config().logging)

    manager = DatabaseManager(args.db_path, db_config=None if args.db_path else get_config().database)
    with manager:
        manager.init_db(drop_all=args.drop)
        tables = sorted(inspect(manager.engine).get_table_names())
        url = manager.engine.url.render_as_string()

    print(f"Database ready ({url}): {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
