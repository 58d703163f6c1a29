"""Configuration management for the mealkit ingredient engine."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Pantry Alerts Configuration
LOW_STOCK_THRESHOLD: Final[dict[str, float]] = {
    "g": float(os.getenv('LOW_STOCK_THRESHOLD_G', '200')),
    "ml": float(os.getenv('LOW_STOCK_THRESHOLD_ML', '500')),
    "piece": float(os.getenv('LOW_STOCK_THRESHOLD_PIECE', '2')),
    "cup": float(os.getenv('LOW_STOCK_THRESHOLD_CUP', '0.5')),
    "lb": float(os.getenv('LOW_STOCK_THRESHOLD_LB', '0.25')),
}

# Reporting
TOP_SHARED_INGREDIENTS: Final[int] = int(os.getenv('TOP_SHARED_INGREDIENTS', '5'))
SUGGESTION_LIMIT: Final[int] = int(os.getenv('SUGGESTION_LIMIT', '5'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALKIT_DATA_DIR', str(BASE_DIR / 'data')))
