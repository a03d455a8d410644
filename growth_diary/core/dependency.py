from functools import lru_cache

from growth_diary.ai.service import CuratedTipService, OpenAITipService, TipService
from growth_diary.core import config


@lru_cache(maxsize=None)
def _curated() -> TipService:
    return CuratedTipService()


@lru_cache(maxsize=None)
def _chatgpt() -> TipService:
    return OpenAITipService(fallback=_curated())


def get_tip_service() -> TipService:
    """
    FastAPI dependency that returns the completion-API tip service when an
    OpenAI key is configured, otherwise the curated one.
    """
    if config.OPENAI_API_KEY:
        return _chatgpt()
    return _curated()
