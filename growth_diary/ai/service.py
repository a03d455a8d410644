from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Union

from openai import OpenAI

from growth_diary.ai.prompts import SYSTEM_PROMPT, build_prompt, curated_tips_for
from growth_diary.core.config import OPENAI_API_KEY, OPENAI_CHAT_MODEL

logger = logging.getLogger(__name__)

Items = Union[List[Dict[str, Any]], Dict[str, Any]]


class TipService:
    """Produces coaching tips for a context of todos, goals or a motivation request."""

    source = "base"

    def get_tips(self, context: str, items: Items) -> Dict[str, str]:
        raise NotImplementedError


class CuratedTipService(TipService):
    """Three tips drawn from a fixed list, used when no completion API is configured."""

    source = "curated"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_tips(self, context: str, items: Items) -> Dict[str, str]:
        tips = self.rng.sample(curated_tips_for(context), 3)
        return {"tips": "\n\n".join(tips), "source": self.source}


class OpenAITipService(TipService):
    """Facade around the chat completion endpoint, falling back to curated tips on any failure."""

    source = "ai"

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: str = OPENAI_CHAT_MODEL,
        fallback: Optional[TipService] = None,
    ):
        self.client = client or OpenAI(api_key=OPENAI_API_KEY)
        self.model = model
        self.fallback = fallback or CuratedTipService()

    def get_tips(self, context: str, items: Items) -> Dict[str, str]:
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(context, items)},
                ],
                max_tokens=300,
                temperature=0.7,
            )
            return {"tips": resp.choices[0].message.content, "source": self.source}
        except Exception as e:
            logger.error(f"AI tips request failed, using curated tips: {e}")
            return self.fallback.get_tips(context, items)
