"""Command entry point: load settings, connect and migrate the database."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from aiiobackend.config import connect_database

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the application; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="aiiobackend",
        description="Connect to the database and prepare its schema.",
    )
    parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    env_file = Path(".env")
    if not env_file.is_file():
        logger.info("No .env file found, using default values")
    else:
        load_dotenv(dotenv_path=env_file)

    try:
        engine = connect_database()
    except RuntimeError as exc:
        logger.critical("Failed to connect to database: %s", exc)
        return 1

    try:
        logger.info("Application started successfully!")
        logger.info("Database connection established")
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())