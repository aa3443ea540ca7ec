"""
core/context.py
Общий контекст процесса: шаблоны + пул клиентов.
Собирается один раз на старте и дальше только читается.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from rich_prompt.core.settings import Settings
from rich_prompt.services.client_pool import ClientPool
from rich_prompt.services.templates import STYLE_FIELD, find_placeholders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    pool: ClientPool
    system_template: str
    system_with_style_template: str


def _has_style_field(template: str) -> bool:
    try:
        return STYLE_FIELD in find_placeholders(template)
    except ValueError:
        return False


def build_context(settings: Settings) -> Context:
    # Не фатально: без {style} падают только запросы со style
    if not _has_style_field(settings.system_with_style_template):
        logger.warning(
            "system_with_style_template has no {%s} placeholder; styled requests will fail",
            STYLE_FIELD,
        )

    pool = ClientPool.from_api_keys(settings.api_keys, base_url=settings.base_url)
    logger.debug("client pool: %d upstream client(s)", len(pool))
    return Context(
        pool=pool,
        system_template=settings.system_template,
        system_with_style_template=settings.system_with_style_template,
    )
