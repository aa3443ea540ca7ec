"""
Pydantic DTO: вход POST /richprompt.
"""
from typing import Optional
from pydantic import BaseModel, Field


class RichPromptRequest(BaseModel):
    """
    - prompt: текст пользователя, уходит user-сообщением как есть
    - style: опционально; если задан — system собирается из system_with_style_template
    """
    prompt: str
    style: Optional[str] = Field(default=None, description="Подставляется в {style}")
