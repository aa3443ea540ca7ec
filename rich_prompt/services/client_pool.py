"""
services/client_pool.py
Пул OpenAI-клиентов: по одному на каждый API-ключ.

На каждый запрос берём случайный клиент (равномерно), чтобы размазать
нагрузку и квоты по аккаунтам. Ни здоровья, ни весов, ни affinity:
лимиты на ключ апстрим считает сам.
"""
from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence, Tuple

import httpx
from openai import AsyncOpenAI  # type: ignore


class NoCredentialsError(ValueError):
    """Пустой список api_keys — сервис не может стартовать."""


class ClientPool:
    def __init__(self, clients: Iterable[AsyncOpenAI], *, rng: Optional[random.Random] = None):
        # tuple: после конструирования пул не меняется, читать можно без локов
        self._clients = tuple(clients)
        if not self._clients:
            raise NoCredentialsError("api_keys must contain at least one key")
        self._rng = rng or random.Random()
        self._http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_api_keys(
        cls,
        api_keys: Sequence[str],
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ) -> "ClientPool":
        """
        Один AsyncOpenAI на ключ, в порядке конфигурации, общий httpx-транспорт.
        max_retries=0 и timeout=None: ни повторов, ни таймаутов на нашей стороне.
        """
        if not api_keys:
            raise NoCredentialsError("api_keys must contain at least one key")

        shared = http_client or httpx.AsyncClient(timeout=None)
        clients = [
            AsyncOpenAI(
                api_key=key,
                base_url=base_url,
                http_client=shared,
                max_retries=0,
                timeout=None,
            )
            for key in api_keys
        ]
        pool = cls(clients, rng=rng)
        pool._http_client = shared
        return pool

    def __len__(self) -> int:
        return len(self._clients)

    @property
    def clients(self) -> Tuple[AsyncOpenAI, ...]:
        return self._clients

    def pick(self) -> AsyncOpenAI:
        """Равномерно случайный клиент, на каждый вызов заново."""
        return self._rng.choice(self._clients)

    async def aclose(self) -> None:
        """Закрывает общий транспорт (на остановке сервиса)."""
        if self._http_client is not None:
            await self._http_client.aclose()
