"""
Запуск: rich-prompt config.toml   (или python -m rich_prompt config.toml)
Уровень логов: RICH_PROMPT_LOG=debug
"""
import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

import uvicorn

from rich_prompt.app.main import create_app
from rich_prompt.core.context import build_context
from rich_prompt.core.logging import setup_logging
from rich_prompt.core.settings import ConfigError, load_settings

logger = logging.getLogger("rich_prompt")


def _version() -> str:
    try:
        return version("rich-prompt")
    except PackageNotFoundError:
        return "unknown"


def main(argv: Optional[List[str]] = None) -> int:
    """CLI-входная точка: конфиг -> контекст -> uvicorn."""
    parser = argparse.ArgumentParser(prog="rich-prompt", description="Rich Prompt HTTP gateway")
    parser.add_argument("config", type=Path, help="Путь к TOML-конфигу")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    args = parser.parse_args(argv)

    try:
        setup_logging()
        settings = load_settings(args.config)
        context = build_context(settings)
    except (ConfigError, ValueError) as exc:  # NoCredentialsError, неизвестный уровень логов
        print(f"❌ {exc}", file=sys.stderr)
        return 1

    app = create_app(context)
    logger.info("Listening on http://%s", settings.bind_addr)
    # log_config=None: оставляем наш формат логов
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
