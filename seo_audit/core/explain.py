import json
import logging
from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from .errors import Degraded, ExplanationQuotaExceeded, Fatal, Ok

log = logging.getLogger("seo-audit")

FALLBACK_TEXT = "AI response not available."

SYSTEM_PROMPT = (
    "You are an SEO and performance expert. "
    "Explain issues clearly for beginners and give practical steps."
)

USER_PROMPT = (
    "Here are website metrics. "
    "1) Explain what is good/bad. "
    "2) Give a prioritized todo list. "
    "3) Suggest better <title> and meta description if needed.\n\n"
)


def build_messages(metrics: Dict[str, Any]) -> list:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT + json.dumps(metrics, ensure_ascii=False)},
    ]


class ExplanationGenerator:
    """
    Turns the audit metrics into plain-language guidance via the OpenAI Responses API.

    explain() returns a tagged outcome instead of raising:
      Ok(text)                          model produced text
      Degraded(reason, FALLBACK_TEXT)   no key, empty output, or any non-quota API error
      Fatal(ExplanationQuotaExceeded)   rate limit / quota rejection
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        client: Optional[Any] = None,
    ):
        self.model = model
        self.client = client
        if self.client is None and api_key:
            # max_retries=0: one call per audit
            self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        if self.client is None:
            log.warning("OPENAI_API_KEY not set, explanations will use the fallback text")

    async def explain(self, metrics: Dict[str, Any]):
        if self.client is None:
            return Degraded("language model not configured", FALLBACK_TEXT)

        try:
            response = await self.client.responses.create(
                model=self.model,
                input=build_messages(metrics),
            )
        except openai.RateLimitError as e:
            log.error("OpenAI quota/rate limit hit: %s", e)
            return Fatal(ExplanationQuotaExceeded(detail=str(e)))
        except openai.OpenAIError as e:
            log.warning("OpenAI request failed: %s", e)
            return Degraded(f"language model error: {e}", FALLBACK_TEXT)

        text = getattr(response, "output_text", None)
        if not isinstance(text, str) or not text.strip():
            log.warning("OpenAI returned no usable text")
            return Degraded("empty language model response", FALLBACK_TEXT)
        return Ok(text)
