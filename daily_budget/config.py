"""Settings for the daily budget package.

Values are module-level constants with environment variable overrides. None
of them changes the allocation arithmetic; they cover the seed location,
logging and the input validation limits.
"""
import logging
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("DAILY_BUDGET_DATA_DIR", _PROJECT_ROOT / "data"))
SEED_PATH = Path(os.getenv("DAILY_BUDGET_SEED", DATA_DIR / "seed.json"))

LOG_LEVEL = os.getenv("DAILY_BUDGET_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

MAX_MONTHLY_AMOUNT = float(os.getenv("DAILY_BUDGET_MAX_MONTHLY_AMOUNT", 1_000_000))
MAX_EXPENSE_AMOUNT = float(os.getenv("DAILY_BUDGET_MAX_EXPENSE_AMOUNT", 100_000))
MAX_DESCRIPTION_LENGTH = 200


def configure_logging(level: str | int | None = None) -> None:
    """Install a basic handler for the package loggers."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
