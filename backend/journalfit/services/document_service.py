"""
JournalFit Backend — Document Service (Provider Orchestrator)
===============================================================

What:  Picks a provider service for each request, calls it, and turns its
       outcome into what the routes return.
Why:   Routes should not know that three SDKs exist, that they fail in three
       different shapes, or that they format articles in two different ways.
How:   Holds one LLMService per provider tag and dispatches by tag.

Orchestration Flow:
    ┌──────────┐    ┌──────────────────┐    ┌─────────────────┐
    │  Route   │───▶│ resolve_provider │───▶│ provider service │
    └──────────┘    └──────────────────┘    └────────┬────────┘
                                                     │
              result ◀── normalize (formatting) ◀────┤
              ProviderRequestError ◀── classify ◀────┘ (on raise)

Provider resolution:
    An absent or unrecognized hint silently selects DEFAULT_PROVIDER. It is
    not a validation error.

Formatting normalization:
    RewrittenArticle  → its updatedArticleText (original text if blank)
    StructuredArticle → pretty-printed JSON of the whole structure
    The JSON form is what /documents/generate-by-template returns for the
    structured variant; it is stable for identical input.

Design Decision:
    DocumentService is stateless between calls. The provider map is fixed at
    construction, which is also the seam tests use to inject stubs.
"""

import json
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Mapping, Optional, TypeVar

from journalfit.exceptions import ProviderError, ProviderRequestError
from journalfit.schemas.document import (
    AnalyzeDocumentResponse,
    FormattedArticle,
    GenerateByTemplateResponse,
    RewrittenArticle,
)
from journalfit.services.error_classifier import classify_provider_error
from journalfit.services.llm_base import LLMService

logger = logging.getLogger(__name__)

PROVIDERS = ("openai", "claude", "gemini")
DEFAULT_PROVIDER = "gemini"

DOCX_FILE_NAME = "formatted.docx"

T = TypeVar("T")


@dataclass(frozen=True)
class FormattedDocumentFile:
    """Flat text ready for the DOCX encoder, plus the download name."""

    content: str
    suggested_file_name: str = DOCX_FILE_NAME


def serialize_article(article: FormattedArticle) -> str:
    """Deterministic JSON rendering of a formatting result (camelCase keys)."""
    return json.dumps(
        article.model_dump(by_alias=True, exclude_none=True),
        indent=2,
        ensure_ascii=False,
    )


def _default_providers() -> Dict[str, LLMService]:
    # Imported lazily so tests can build a DocumentService from stubs alone
    from journalfit.services.claude_service import claude_service
    from journalfit.services.gemini_service import gemini_service
    from journalfit.services.openai_service import openai_service

    return {
        "openai": openai_service,
        "claude": claude_service,
        "gemini": gemini_service,
    }


class DocumentService:
    """
    Business logic layer for document analysis and formatting.

    Responsibilities:
        - resolve_provider(): hint → one of PROVIDERS
        - analyze(): journal recommendations
        - format_by_template(): formatted text for the JSON endpoint
        - format_by_template_as_document(): flat text for the DOCX endpoint

    Error Handling Strategy:
        A ProviderError from a provider service is classified into
        (status, message) and re-raised as ProviderRequestError with the
        provider tag attached. Other exceptions are not provider failures
        and propagate unchanged.
        Empty or unusable model output is never an error at this layer;
        the provider services have already replaced it with a default.
    """

    def __init__(self, providers: Optional[Mapping[str, LLMService]] = None):
        self.providers: Dict[str, LLMService] = dict(
            providers if providers is not None else _default_providers()
        )
        missing = [tag for tag in PROVIDERS if tag not in self.providers]
        if missing:
            raise ValueError(f"DocumentService is missing provider(s): {', '.join(missing)}")

    @staticmethod
    def resolve_provider(hint: Optional[str]) -> str:
        """Return `hint` if it names a known provider, else DEFAULT_PROVIDER."""
        if hint in PROVIDERS:
            return hint
        if hint:
            logger.info("Unknown aiProvider %r, using %s", hint, DEFAULT_PROVIDER)
        return DEFAULT_PROVIDER

    async def analyze(
        self, document_text: str, provider_hint: Optional[str] = None
    ) -> AnalyzeDocumentResponse:
        """
        Recommend journals for a document.

        Raises:
            ProviderRequestError: the provider call failed.
        """
        provider = self.resolve_provider(provider_hint)
        journals = await self._dispatch(
            provider,
            lambda service: service.recommend_journals(document_text),
        )
        logger.info("Provider %s recommended %d journal(s)", provider, len(journals))
        return AnalyzeDocumentResponse(journals=journals)

    async def format_by_template(
        self,
        document_text: str,
        template_id: str,
        provider_hint: Optional[str] = None,
    ) -> GenerateByTemplateResponse:
        """
        Format a document for a template and return it as one string.

        Raises:
            ProviderRequestError: the provider call failed.
        """
        article = await self._format(document_text, template_id, provider_hint)

        if isinstance(article, RewrittenArticle):
            formatted = article.updated_article_text or document_text
        else:
            formatted = serialize_article(article)
        return GenerateByTemplateResponse(formatted_document=formatted)

    async def format_by_template_as_document(
        self,
        document_text: str,
        template_id: str,
        provider_hint: Optional[str] = None,
    ) -> FormattedDocumentFile:
        """
        Format a document for a template and flatten it for DOCX encoding.

        Preference: updatedArticleText, then the JSON rendering, then the
        original text.

        Raises:
            ProviderRequestError: the provider call failed.
        """
        article = await self._format(document_text, template_id, provider_hint)

        if isinstance(article, RewrittenArticle) and article.updated_article_text:
            content = article.updated_article_text
        elif isinstance(article, RewrittenArticle):
            content = document_text
        else:
            content = serialize_article(article) or document_text
        return FormattedDocumentFile(content=content)

    async def _format(
        self,
        document_text: str,
        template_id: str,
        provider_hint: Optional[str],
    ) -> FormattedArticle:
        provider = self.resolve_provider(provider_hint)
        return await self._dispatch(
            provider,
            lambda service: service.format_article_for_template(template_id, document_text),
        )

    async def _dispatch(
        self,
        provider: str,
        call: Callable[[LLMService], Awaitable[T]],
    ) -> T:
        """
        Run `call` against the provider's service; classify its failure.

        Only ProviderError is classified. Any other exception propagates
        unchanged to the generic 500 handler.
        """
        service = self.providers[provider]
        try:
            return await call(service)
        except ProviderError as e:
            status, message = classify_provider_error(e, provider)
            logger.error(
                "Provider %s failed with status %d: %s",
                provider,
                status,
                message,
            )
            raise ProviderRequestError(
                status=status,
                message=message,
                provider=provider,
                context={"error_type": type(e).__name__},
            ) from e


document_service = DocumentService()
