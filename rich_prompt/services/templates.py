"""
Сборка system-сообщения из двух шаблонов конфигурации.
"""
from string import Formatter
from typing import List, Optional

STYLE_FIELD = "style"


class TemplateError(ValueError):
    """Не удалось подставить style в system_with_style_template."""


def find_placeholders(template: str) -> List[str]:
    """Имена полей шаблона в порядке появления ('' — позиционное {})."""
    return [field for _, field, _, _ in Formatter().parse(template) if field is not None]


def render_system_prompt(
    style: Optional[str],
    *,
    system_template: str,
    system_with_style_template: str,
) -> str:
    if style is None:
        return system_template

    try:
        fields = find_placeholders(system_with_style_template)
        if STYLE_FIELD not in fields:
            raise KeyError(STYLE_FIELD)
        return system_with_style_template.format_map({STYLE_FIELD: style})
    except (KeyError, IndexError, ValueError) as e:
        raise TemplateError("failed to format system_with_style_template") from e
