"""
JournalFit Backend — Google Gemini Service Implementation
===========================================================

What:  Provider service for Google Gemini (the default provider).
Why:   Gemini has a generous free tier and follows JSON-only instructions well,
       which makes it the safest choice when the client does not pick one.
How:   Sends one free-text prompt per operation, reads `response.text`, and
       validates it as JSON against the payload schema.
Who:   Instantiated once at import; called by DocumentService.

Formatting variant: REWRITE. Gemini returns the whole article rewritten
(`updatedArticleText`), plus an optional change summary and warnings.

Response extraction:
    `response.text` raises ValueError when the response carries no text
    part (safety block, empty candidate list). That is treated as an empty
    answer, i.e. a model-quality failure, not an infrastructure one.
"""

import logging
import time
import uuid
from typing import List

import google.generativeai as genai

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


class GeminiService(LLMService):
    """
    Google Gemini implementation of the provider contract.

    Error Handling:
        SDK call raises → ProviderError (message from google.api_core's
        .message, status from its .code) → DocumentService classifies it.
        Nothing is retried; the SDK's own retry is disabled per request.
    """

    provider = "gemini"
    label = "Gemini"

    def __init__(self):
        # The SDK keeps auth in module-level state
        if settings.gemini_api_key:
            genai.configure(api_key=settings.gemini_api_key)

        self.model = genai.GenerativeModel(settings.gemini_model)

        logger.info("GeminiService initialized with model=%s", settings.gemini_model)

    def is_configured(self) -> bool:
        return bool(settings.gemini_api_key)

    async def recommend_journals(self, document_text: str) -> List[Journal]:
        prompt = build_recommendation_prompt(document_text)
        raw = await self._generate(prompt, action="get journal recommendations")

        if not raw:
            logger.warning("Gemini returned empty response")
            return []

        payload = parse_json_payload(raw, JournalsPayload)
        return list(payload.journals) if payload else []

    async def format_article_for_template(
        self, template_id: str, article_text: str
    ) -> FormattedArticle:
        prompt = build_rewrite_prompt(article_text, get_guidelines(template_id))
        raw = await self._generate(prompt, action="format article")

        parsed = parse_json_payload(raw, RewrittenArticle)
        return parsed or fallback_rewrite(article_text)

    async def _generate(self, prompt: str, action: str) -> str:
        """
        Make the single Gemini call for an operation and return its text.

        Raises:
            ProviderError: the SDK call failed.
        """
        call_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        try:
            response = await self.model.generate_content_async(
                prompt,
                # Exactly one attempt; the SDK would otherwise retry on 5xx
                request_options={"retry": None},
            )
        except Exception as e:
            logger.warning(
                "[%s] Gemini API call failed after %.0fms",
                call_id,
                (time.time() - start_time) * 1000,
            )
            raise self.provider_error(e, action) from e

        try:
            text = response.text or ""
        except ValueError:
            # No text part: blocked prompt or empty candidate list
            logger.warning("[%s] Gemini response has no text part", call_id)
            text = ""

        logger.info(
            "[%s] Gemini %s completed in %.0fms, received %d chars",
            call_id,
            action,
            (time.time() - start_time) * 1000,
            len(text),
        )
        return text.strip()


gemini_service = GeminiService()
