"""
JournalFit Backend — Anthropic Claude Service Implementation
==============================================================

What:  Provider service for Anthropic's Messages API.
How:   One `messages.create` call per operation at temperature 0, then the
       first `text` content block is validated as JSON.
Who:   Instantiated once at import; called by DocumentService.

Formatting variant: REWRITE (same payload as Gemini).

Claude has no native structured-output mode on the Messages API, so the
required JSON shape is spelled out in the prompt and the answer is checked
against the schema afterwards.
"""

import logging
from typing import Any, List

from anthropic import AsyncAnthropic

from journalfit.config import settings
from journalfit.schemas.document import (
    FormattedArticle,
    Journal,
    JournalsPayload,
    RewrittenArticle,
)
from journalfit.services.guidelines import get_guidelines
from journalfit.services.llm_base import (
    LLMService,
    build_recommendation_prompt,
    build_rewrite_prompt,
    fallback_rewrite,
    parse_json_payload,
)

logger = logging.getLogger(__name__)


def extract_text_content(message: Any) -> str:
    """
    Text of the first `text` block in a Messages API response, stripped.

    Returns "" for anything that does not look like a message: no content
    list, no text block, or a non-string text field.
    """
    content = getattr(message, "content", None)
    if not isinstance(content, list):
        return ""

    for block in content:
        if getattr(block, "type", None) == "text":
            text = getattr(block, "text", None)
            if isinstance(text, str):
                return text.strip()
    return ""


class ClaudeService(LLMService):
    """Anthropic implementation of the provider contract."""

    provider = "claude"
    label = "Claude"

    def __init__(self):
        # max_retries=0: one network call per operation
        self.client = AsyncAnthropic(api_key=settings.anthropic_api_key, max_retries=0)
        logger.info("ClaudeService initialized with model=%s", settings.anthropic_model)

    def is_configured(self) -> bool:
        return bool(settings.anthropic_api_key)

    async def recommend_journals(self, document_text: str) -> List[Journal]:
        raw = await self._complete(
            build_recommendation_prompt(document_text),
            max_tokens=settings.anthropic_max_tokens_recommend,
            action="get journal recommendations",
        )

        if not raw:
            logger.warning("Claude returned empty response")
            return []

        payload = parse_json_payload(raw, JournalsPayload)
        return list(payload.journals) if payload else []

    async def format_article_for_template(
        self, template_id: str, article_text: str
    ) -> FormattedArticle:
        raw = await self._complete(
            build_rewrite_prompt(article_text, get_guidelines(template_id)),
            max_tokens=settings.anthropic_max_tokens_format,
            action="format article",
        )

        parsed = parse_json_payload(raw, RewrittenArticle)
        return parsed or fallback_rewrite(article_text)

    async def _complete(self, prompt: str, max_tokens: int, action: str) -> str:
        try:
            message = await self.client.messages.create(
                model=settings.anthropic_model,
                max_tokens=max_tokens,
                temperature=0,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise self.provider_error(e, action) from e

        if getattr(message, "stop_reason", None) == "max_tokens":
            # Truncated JSON will fail validation below; say why in the log
            logger.warning("Claude hit max_tokens=%d while trying to %s", max_tokens, action)

        return extract_text_content(message)


claude_service = ClaudeService()
