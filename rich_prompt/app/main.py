"""
app/main.py
FastAPI-приложение шлюза. Контекст собирается снаружи (см. rich_prompt.__main__)
и кладётся в app.state, чтобы тесты могли подсунуть свой пул.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from rich_prompt.app.routers import router
from rich_prompt.core.context import Context

logger = logging.getLogger(__name__)


def create_app(context: Context) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await context.pool.aclose()

    app = FastAPI(
        title="Rich Prompt Gateway",
        version="0.1.0",
        description="Шаблонный system-промпт + случайный ключ апстрима -> ответ модели текстом.",
        lifespan=lifespan,
    )
    app.state.context = context

    # Битый JSON / нет prompt: 400 до хендлера
    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError):
        # только loc/msg: тело запроса назад не отдаём
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        )
        return PlainTextResponse(f"invalid request body: {problems}", status_code=400)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.error("Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
        return PlainTextResponse(f"{type(exc).__name__}: {exc}", status_code=500)

    app.include_router(router)
    return app
