"""
services/completion.py
Один chat-completion вызов через случайный клиент пула.

Форма запроса фиксирована: модель, потолок токенов, top_p=0 и ровно
два сообщения (system, user). Повторов нет: ошибка апстрима сразу
уходит вызывающему.
"""
from __future__ import annotations

from typing import Any, Dict, List

from openai import OpenAIError  # type: ignore
from openai.types.chat import ChatCompletion  # type: ignore

from rich_prompt.services.client_pool import ClientPool

__all__ = [
    "MODEL",
    "MAX_TOKENS",
    "TOP_P",
    "CompletionError",
    "UpstreamError",
    "NoChoicesError",
    "NoContentError",
    "build_payload",
    "complete",
]

MODEL = "gpt-3.5-turbo"
MAX_TOKENS = 512
TOP_P = 0.0


class CompletionError(RuntimeError):
    """Базовая ошибка вызова апстрима (-> HTTP 500)."""


class UpstreamError(CompletionError):
    """Сеть, HTTP-статус или битый ответ апстрима; текст — от openai."""


class NoChoicesError(CompletionError):
    def __init__(self, message: str = "choices is empty"):
        super().__init__(message)


class NoContentError(CompletionError):
    def __init__(self, message: str = "content is empty"):
        super().__init__(message)


def build_payload(system: str, prompt: str) -> Dict[str, Any]:
    messages: List[Dict[str, str]] = [
        {"role": "system", "content": system},
        {"role": "user", "content": prompt},
    ]
    return {
        "model": MODEL,
        "messages": messages,
        "max_tokens": MAX_TOKENS,
        "top_p": TOP_P,
    }


async def complete(pool: ClientPool, system: str, prompt: str) -> str:
    """
    Возвращает текст ответа модели.
    - UpstreamError: openai не смог выполнить запрос или ответ не разобрался;
    - NoChoicesError: пустой choices;
    - NoContentError: у выбранного choice нет текста.
    """
    client = pool.pick()
    try:
        resp = await client.chat.completions.create(**build_payload(system, prompt))  # type: ignore
    except OpenAIError as e:
        raise UpstreamError(str(e)) from e

    # 200 с не-JSON телом: openai отдаёт сырую строку
    if not isinstance(resp, ChatCompletion):
        raise UpstreamError(f"malformed upstream response: {type(resp).__name__}")

    # choices как стек: берём последний, при одном варианте он же единственный
    choices = list(resp.choices or [])
    if not choices:
        raise NoChoicesError()
    choice = choices.pop()

    content = choice.message.content if choice.message is not None else None
    if not content:
        raise NoContentError()
    return content
