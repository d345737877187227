"""
JournalFit Backend — OpenAI Service Implementation
====================================================

What:  Provider service for the OpenAI Responses API.
How:   `responses.parse(text_format=<pydantic model>)` asks the API for
       Structured Outputs. The SDK validates the answer against the model and
       exposes it as `output_parsed`, so there is no text to extract.
Who:   Instantiated once at import; called by DocumentService.

Formatting variant: STRUCTURED. The article comes back as a title plus
ordered sections rather than one rewritten string.

Model-quality failures still happen here: a refusal leaves `output_parsed`
empty, and a truncated answer fails the SDK's own validation. Both degrade
to the documented default like the free-text providers.
"""

import logging
from typing import List, Optional, Type, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from journalfit.config import settings
from journalfit.schemas.document import (
    FormattedArticle,
    Journal,
    JournalsPayload,
    StructuredArticle,
)
from journalfit.services.guidelines import get_guidelines
from journalfit.services.llm_base import (
    FORMAT_MAX_CHARS,
    RECOMMEND_MAX_CHARS,
    RECOMMENDATION_COUNT,
    LLMService,
    empty_structured_article,
    truncate,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class OpenAIService(LLMService):
    """OpenAI implementation of the provider contract."""

    provider = "openai"
    label = "OpenAI"

    def __init__(self):
        # max_retries=0: one network call per operation
        self.client = AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
        logger.info("OpenAIService initialized with model=%s", settings.openai_model)

    def is_configured(self) -> bool:
        return bool(settings.openai_api_key)

    async def recommend_journals(self, document_text: str) -> List[Journal]:
        prompt = f"""
Given the article text, recommend {RECOMMENDATION_COUNT} journals.
Return STRICT JSON:
{{
  "journals": [
    {{ "id": "1", "name": "Journal name", "reason": "why", "description": "A leading journal for scientific research", "templateId": "template-1" }}
  ]
}}

TEXT:
{truncate(document_text, RECOMMEND_MAX_CHARS)}
"""
        payload = await self._parse(
            system="You are an academic publishing assistant.",
            prompt=prompt,
            text_format=JournalsPayload,
            action="get journal recommendations",
        )
        return list(payload.journals) if payload else []

    async def format_article_for_template(
        self, template_id: str, article_text: str
    ) -> FormattedArticle:
        prompt = f"""
Format the article for the journal below.

Return STRICT JSON:
{{
  "title": "...",
  "sections": [
    {{ "heading": "Introduction", "content": "..." }}
  ]
}}

Journal: {template_id}
Guidelines: {get_guidelines(template_id)}

ARTICLE:
{truncate(article_text, FORMAT_MAX_CHARS)}
"""
        article = await self._parse(
            system="You are a scientific editor.",
            prompt=prompt,
            text_format=StructuredArticle,
            action="format article",
        )
        return article or empty_structured_article()

    async def _parse(
        self,
        system: str,
        prompt: str,
        text_format: Type[ModelT],
        action: str,
    ) -> Optional[ModelT]:
        """
        One Structured Outputs call.

        Returns:
            The parsed model, or None when the model refused or its answer
            did not validate.

        Raises:
            ProviderError: the API call failed.
        """
        try:
            response = await self.client.responses.parse(
                model=settings.openai_model,
                input=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                text_format=text_format,
            )
        except PydanticValidationError as e:
            logger.warning(
                "OpenAI output failed %s validation with %d error(s)",
                text_format.__name__,
                e.error_count(),
            )
            return None
        except Exception as e:
            raise self.provider_error(e, action) from e

        parsed = response.output_parsed
        if parsed is None:
            logger.warning("OpenAI returned no parsed output while trying to %s", action)
        return parsed


openai_service = OpenAIService()
