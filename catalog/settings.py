# catalog/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent

# Alias table, date formats and missing-value defaults live in JSON, not code
NORMALIZATION_CONFIG = Path(os.getenv("NORMALIZATION_CONFIG", PACKAGE_DIR / "normalization.json"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog.sqlite3")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Threads used by clean_batch; 1 means serial
CLEAN_WORKERS = int(os.getenv("CLEAN_WORKERS", "1"))
