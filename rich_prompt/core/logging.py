"""
core/logging.py
Логирование в консоль. Уровень берём из RICH_PROMPT_LOG (по умолчанию INFO).
"""
import logging
import os
import sys
from typing import Optional

LOG_ENV = "RICH_PROMPT_LOG"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Имена, которых нет в stdlib logging
_EXTRA_LEVELS = {
    "TRACE": logging.DEBUG,
    "OFF": logging.CRITICAL + 10,
}


def parse_level(name: str) -> int:
    key = name.strip().upper()
    if key in _EXTRA_LEVELS:
        return _EXTRA_LEVELS[key]
    level = logging.getLevelName(key)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name!r}")
    return level


def setup_logging(level: Optional[str] = None) -> int:
    """Настраивает root-логгер и возвращает выставленный уровень."""
    lvl = parse_level(level or os.getenv(LOG_ENV) or "INFO")

    root = logging.getLogger()
    root.setLevel(lvl)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # шумные библиотеки
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))

    return lvl
