"""
Runtime configuration and logging setup.

Values come from the environment (a local .env file is honoured):

    UNIVERSITY_DATA   path to the dataset JSON   (default: data/university.json)
    LOG_DIR           directory for app.log      (default: logs/)
    LOG_LEVEL         root log level             (default: INFO)

Logs go to stdout and logs/app.log (rotating, 5 MB max, 3 backups).
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

ROOT_DIR = Path(__file__).parent.parent

DATA_DIR     = ROOT_DIR / "data"
DATASET_FILE = Path(os.getenv("UNIVERSITY_DATA", DATA_DIR / "university.json"))

LOG_DIR   = Path(os.getenv("LOG_DIR", ROOT_DIR / "logs"))
LOG_FILE  = LOG_DIR / "app.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s  %(levelname)s  %(message)s"

# Marks handlers installed by setup_logging(); Streamlit re-runs the page
# script on every interaction and must not stack duplicates.
_HANDLER_TAG = "_university_browser"


def setup_logging(log_dir: Path = LOG_DIR, level: str = LOG_LEVEL) -> None:
    root = logging.getLogger()
    if any(getattr(h, _HANDLER_TAG, False) for h in root.handlers):
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE.name, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    for handler in (stream, rotating):
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)
    root.setLevel(level)
