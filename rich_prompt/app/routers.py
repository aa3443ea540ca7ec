"""
app/routers.py
HTTP-роут шлюза: один эндпойнт POST /richprompt.
Render -> Invoke -> Respond, без повторов.
"""
import logging

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import PlainTextResponse

from rich_prompt.core.context import Context
from rich_prompt.schemas import RichPromptRequest
from rich_prompt.services.completion import CompletionError, complete
from rich_prompt.services.templates import TemplateError, render_system_prompt

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rich Prompt"])


def get_context(request: Request) -> Context:
    """DI: общий контекст, собранный на старте."""
    return request.app.state.context


@router.post(
    "/richprompt",
    response_class=PlainTextResponse,
    summary="Собрать system-промпт и вернуть ответ модели текстом",
)
async def rich_prompt(
    req: RichPromptRequest = Body(...),
    ctx: Context = Depends(get_context),
) -> PlainTextResponse:
    try:
        system = render_system_prompt(
            req.style,
            system_template=ctx.system_template,
            system_with_style_template=ctx.system_with_style_template,
        )
        content = await complete(ctx.pool, system, req.prompt)
    except (TemplateError, CompletionError) as e:
        logger.debug("richprompt failed: %s: %s", type(e).__name__, e)
        return PlainTextResponse(str(e), status_code=500)

    return PlainTextResponse(content)
