"""
OpenAI client factory.

The client is created once by the application startup hook and stored on
`app.state`; agents receive it through their constructor.
"""
from typing import Optional

from openai import AsyncOpenAI
from app.config import settings


def create_openai_client(api_key: Optional[str] = None) -> Optional[AsyncOpenAI]:
    """
    Create an OpenAI client, or None when no API key is configured.

    Args:
        api_key: Overrides settings.OPENAI_API_KEY

    Returns:
        AsyncOpenAI client shared by every agent of the process

    Example:
        >>> client = create_openai_client()
        >>> response = await client.chat.completions.create(...)
    """
    key = (api_key if api_key is not None else settings.OPENAI_API_KEY).strip()
    if not key:
        return None
    return AsyncOpenAI(api_key=key)
