# cardiorisk/config.py
import os
import logging

from dotenv import load_dotenv

load_dotenv()


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _int_env(name: str, default: int, low: int = None, high: int = None) -> int:
    try:
        value = int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    if (low is not None and value < low) or (high is not None and value > high):
        return default
    return value


API_URL = os.getenv("API_URL", "http://127.0.0.1:8000").rstrip("/")
PREDICTOR_TIMEOUT = _float_env("PREDICTOR_TIMEOUT", 30.0)

HISTORY_KEY = os.getenv("HISTORY_KEY", "cardio_history")
MAX_HISTORY_CAPACITY = 10
HISTORY_CAPACITY = _int_env("HISTORY_CAPACITY", MAX_HISTORY_CAPACITY, 1, MAX_HISTORY_CAPACITY)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
