"""
JournalFit Backend — Abstract LLM Provider Interface
======================================================

What:  Abstract base class every provider service implements, plus the
       parsing helpers they share.
Why:   The orchestrator dispatches by provider tag to one of exactly three
       services. A shared contract keeps DocumentService ignorant of which
       SDK sits behind a tag. This is the Strategy design pattern.
How:   Concrete services (OpenAIService, ClaudeService, GeminiService) inherit
       from LLMService and implement the two operations.

Failure contract shared by every implementation:
    - Malformed model output (empty text, invalid JSON, schema mismatch) is
      NOT an error. The service returns a documented default instead:
        recommend_journals           → []
        structured formatting        → StructuredArticle(title="", sections=[])
        rewrite formatting           → the original text, with a warning
    - Infrastructure failure (network, auth, rate limit, upstream 5xx) raises
      ProviderError. Exactly one network call is made; nothing is retried.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from journalfit.exceptions import ProviderError
from journalfit.schemas.document import (
    FormattedArticle,
    Journal,
    RewrittenArticle,
    StructuredArticle,
)
from journalfit.services.error_classifier import extract_message, extract_status

logger = logging.getLogger(__name__)

# Character budgets applied before a document is embedded in a prompt.
# Hard cuts: anything past the budget is invisible to the model.
RECOMMEND_MAX_CHARS = 6000
FORMAT_MAX_CHARS = 12000

RECOMMENDATION_COUNT = 3

FALLBACK_CHANGE_SUMMARY = "No changes parsed from model response."
FALLBACK_WARNING = "Model returned empty or invalid JSON."

# ```json ... ``` wrapper some models add despite being told not to
_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)

ModelT = TypeVar("ModelT", bound=BaseModel)


def truncate(text: str, limit: int) -> str:
    """Cut `text` to at most `limit` characters. Shorter text is returned as-is."""
    if len(text) <= limit:
        return text
    return text[:limit]


def parse_json_payload(raw: Optional[str], model: Type[ModelT]) -> Optional[ModelT]:
    """
    Parse a model's raw text answer into `model`.

    Returns None (never raises) when the text is empty, cannot be decoded
    (including integers past the digit limit and nesting past the recursion
    limit), or does not match the schema. Each of those is logged at WARNING.
    """
    text = (raw or "").strip()
    if not text:
        logger.warning("Empty model response; expected %s JSON", model.__name__)
        return None

    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; oversized ints and deep nesting raise the others
        logger.warning("Model response is not valid JSON (%s): %.120r", type(e).__name__, text)
        return None

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(
            "Model response failed %s validation with %d error(s)",
            model.__name__,
            e.error_count(),
        )
        return None


def empty_structured_article() -> StructuredArticle:
    return StructuredArticle(title="", sections=[])


def fallback_rewrite(article_text: str) -> RewrittenArticle:
    """Hand the caller's own text back unchanged when no rewrite could be parsed."""
    return RewrittenArticle(
        updated_article_text=article_text,
        change_summary=FALLBACK_CHANGE_SUMMARY,
        warnings=[FALLBACK_WARNING],
    )


def build_recommendation_prompt(document_text: str) -> str:
    """Recommendation prompt shared by the free-text providers (Claude, Gemini)."""
    return f"""
Based on this research article, recommend {RECOMMENDATION_COUNT} suitable academic journals for publication. Consider the article's topic, methodology, and scope.

Article text:
{truncate(document_text, RECOMMEND_MAX_CHARS)}

Return STRICT JSON only:
{{
  "journals": [
    {{ "id": "1", "name": "Journal Name", "reason": "why it's suitable", "description": "short description", "templateId": "template-1" }}
  ]
}}"""


def build_rewrite_prompt(article_text: str, guidelines: str) -> str:
    """Full-text rewrite prompt shared by the rewrite-variant providers."""
    return f"""
You are a journal formatting assistant. Rewrite the article to comply with the journal guidelines.
- Apply formatting, structure, and citation style rules from the guidelines.
- Do NOT invent sources, data, or claims. If information is missing, leave it as-is.
- Length: keep approximately the same; do not force word-count changes.
- Return STRICT JSON only, matching this schema (no markdown or extra text):
{{
  "updatedArticleText": "full rewritten article text",
  "changeSummary": "short bullet-style summary of main changes (optional)",
  "warnings": ["issues or missing info you could not resolve (optional)"]
}}

Article:
{truncate(article_text, FORMAT_MAX_CHARS)}

Journal Guidelines:
{guidelines}
"""


class LLMService(ABC):
    """
    Abstract interface for one AI provider.

    Contract:
        - recommend_journals() returns up to three Journal entries, in the
          order the model gave them, or [] when the output is unusable
        - format_article_for_template() returns the provider's native
          FormattedArticle variant (StructuredArticle or RewrittenArticle)
        - SDK exceptions are wrapped in ProviderError via provider_error()

    Implementations:
        - OpenAIService: OpenAI Responses API with native structured output
        - ClaudeService: Anthropic Messages API
        - GeminiService: Google Gemini (default provider)
    """

    #: Provider tag used for routing and in error envelopes
    provider: str = ""
    #: Human-readable label used in error messages ("Gemini API error: ...")
    label: str = ""

    @abstractmethod
    async def recommend_journals(self, document_text: str) -> List[Journal]:
        """
        Recommend publication venues for a document.

        Args:
            document_text: Full manuscript text. Only the first
                RECOMMEND_MAX_CHARS characters reach the model.

        Returns:
            List[Journal]: Parsed recommendations; [] for unusable output.

        Raises:
            ProviderError: The upstream call failed.
        """
        ...

    @abstractmethod
    async def format_article_for_template(
        self, template_id: str, article_text: str
    ) -> FormattedArticle:
        """
        Reformat an article for a journal's guidelines.

        Args:
            template_id: Guideline key (unknown keys get generic guidelines).
            article_text: Manuscript text. Only the first FORMAT_MAX_CHARS
                characters reach the model.

        Raises:
            ProviderError: The upstream call failed.
        """
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """True when an API key is present. Makes no network call."""
        ...

    def provider_error(self, exc: Exception, action: str) -> ProviderError:
        """
        Wrap an SDK exception in ProviderError.

        The message keeps the provider's own wording, taken from the most
        specific field the SDK exposes. The SDK's structured error body rides
        along in `error` so later classification can prefer it too.
        """
        detail = extract_message(exc) or f"Failed to {action} with {self.label}"
        logger.error("%s API call failed while trying to %s: %s", self.label, action, detail)
        body = getattr(exc, "body", None)
        return ProviderError(
            provider=self.provider,
            message=f"{self.label} API error: {detail}",
            status=extract_status(exc),
            error=body,
            context={"error_type": type(exc).__name__, "action": action},
        )

