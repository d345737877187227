"""
JournalFit Backend — Document Service Unit Tests
==================================================

What:  Tests for provider resolution, dispatch, normalization and error
       classification in DocumentService.
How:   DocumentService is built from StubProvider instances; no SDK involved.

What we test:
    ✅ Absent / unknown provider hints select Gemini
    ✅ Only the resolved provider is called
    ✅ Rewrite and structured results normalize to one string
    ✅ DOCX flattening and suggested file name
    ✅ Provider failures become ProviderRequestError with the provider tag
"""

import json

import pytest

from journalfit.exceptions import ProviderError, ProviderRequestError
from journalfit.schemas.document import (
    ArticleSection,
    RewrittenArticle,
    StructuredArticle,
)
from journalfit.services.document_service import (
    DEFAULT_PROVIDER,
    DocumentService,
    FormattedDocumentFile,
    serialize_article,
)

STRUCTURED = StructuredArticle(
    title="Deep Learning for Early Tumor Detection",
    sections=[
        ArticleSection(heading="Introduction", content="Screening matters."),
        ArticleSection(heading="Methods", content="We trained a CNN."),
    ],
)


# ══════════════════════════════════════════════════════════════════════════
# Provider Resolution
# ══════════════════════════════════════════════════════════════════════════


class TestResolveProvider:

    @pytest.mark.parametrize("hint", ["openai", "claude", "gemini"])
    def test_known_tags_are_kept(self, hint):
        assert DocumentService.resolve_provider(hint) == hint

    @pytest.mark.parametrize("hint", [None, "", "mistral", "OpenAI", " claude"])
    def test_absent_or_unknown_falls_back_to_gemini(self, hint):
        assert DocumentService.resolve_provider(hint) == DEFAULT_PROVIDER == "gemini"

    def test_missing_provider_is_rejected(self, stub_providers):
        del stub_providers["claude"]
        with pytest.raises(ValueError, match="claude"):
            DocumentService(stub_providers)


# ══════════════════════════════════════════════════════════════════════════
# Analyze
# ══════════════════════════════════════════════════════════════════════════


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_default_provider_returns_three_journals(
        self, make_provider, stub_providers, three_journals
    ):
        stub_providers["gemini"] = make_provider("gemini", journals=three_journals)
        service = DocumentService(stub_providers)

        response = await service.analyze("This paper studies X...")

        assert [j.name for j in response.journals] == ["Journal 1", "Journal 2", "Journal 3"]
        assert stub_providers["gemini"].calls == [("recommend_journals", "This paper studies X...")]
        assert stub_providers["openai"].calls == []
        assert stub_providers["claude"].calls == []

    @pytest.mark.asyncio
    async def test_explicit_provider_is_used(self, stub_providers):
        service = DocumentService(stub_providers)

        await service.analyze("text", "openai")

        assert len(stub_providers["openai"].calls) == 1
        assert stub_providers["gemini"].calls == []

    @pytest.mark.asyncio
    async def test_unknown_provider_uses_gemini(self, stub_providers):
        service = DocumentService(stub_providers)

        await service.analyze("text", "mistral")

        assert len(stub_providers["gemini"].calls) == 1

    @pytest.mark.asyncio
    async def test_empty_recommendations_are_not_an_error(self, stub_providers):
        service = DocumentService(stub_providers)
        response = await service.analyze("text", "claude")
        assert response.journals == []


# ══════════════════════════════════════════════════════════════════════════
# Format by Template
# ══════════════════════════════════════════════════════════════════════════


class TestFormatByTemplate:

    @pytest.mark.asyncio
    async def test_rewrite_returns_updated_text(self, stub_providers):
        service = DocumentService(stub_providers)

        response = await service.format_by_template("Original", "template-1", "claude")

        assert response.formatted_document == "[template-1] Original"
        assert stub_providers["claude"].calls == [
            ("format_article_for_template", "template-1", "Original")
        ]

    @pytest.mark.asyncio
    async def test_blank_rewrite_returns_original_text(self, make_provider, stub_providers):
        stub_providers["gemini"] = make_provider(
            "gemini", article=RewrittenArticle(updated_article_text="")
        )
        service = DocumentService(stub_providers)

        response = await service.format_by_template("Original", "template-1")

        assert response.formatted_document == "Original"

    @pytest.mark.asyncio
    async def test_structured_result_is_serialized_as_json(self, make_provider, stub_providers):
        stub_providers["openai"] = make_provider("openai", article=STRUCTURED)
        service = DocumentService(stub_providers)

        response = await service.format_by_template("Original", "template-1", "openai")

        data = json.loads(response.formatted_document)
        assert data["title"] == STRUCTURED.title
        assert [s["heading"] for s in data["sections"]] == ["Introduction", "Methods"]

    @pytest.mark.asyncio
    async def test_same_input_gives_same_output(self, make_provider, stub_providers):
        stub_providers["openai"] = make_provider("openai", article=STRUCTURED)
        service = DocumentService(stub_providers)

        first = await service.format_by_template("Original", "template-1", "openai")
        second = await service.format_by_template("Original", "template-1", "openai")

        assert first == second

    def test_serialize_uses_camel_case_and_drops_nulls(self):
        rendered = serialize_article(RewrittenArticle(updated_article_text="Body"))
        assert json.loads(rendered) == {"updatedArticleText": "Body"}


class TestFormatAsDocument:

    @pytest.mark.asyncio
    async def test_rewrite_content_and_file_name(self, stub_providers):
        service = DocumentService(stub_providers)

        result = await service.format_by_template_as_document("Original", "template-2")

        assert result == FormattedDocumentFile(content="[template-2] Original")
        assert result.suggested_file_name == "formatted.docx"

    @pytest.mark.asyncio
    async def test_blank_rewrite_uses_original_text(self, make_provider, stub_providers):
        stub_providers["claude"] = make_provider(
            "claude", article=RewrittenArticle(updated_article_text="")
        )
        service = DocumentService(stub_providers)

        result = await service.format_by_template_as_document("Original", "template-1", "claude")

        assert result.content == "Original"

    @pytest.mark.asyncio
    async def test_structured_result_is_flattened_to_json(self, make_provider, stub_providers):
        stub_providers["openai"] = make_provider(
            "openai", article=StructuredArticle(title="", sections=[])
        )
        service = DocumentService(stub_providers)

        result = await service.format_by_template_as_document("Original", "template-1", "openai")

        assert json.loads(result.content) == {"title": "", "sections": []}


# ══════════════════════════════════════════════════════════════════════════
# Error Classification
# ══════════════════════════════════════════════════════════════════════════


class TestProviderFailures:

    @pytest.mark.asyncio
    async def test_overloaded_claude_becomes_503(self, make_provider, stub_providers):
        stub_providers["claude"] = make_provider(
            "claude",
            error=ProviderError(provider="claude", message="Claude API error: Overloaded", status=503),
        )
        service = DocumentService(stub_providers)

        with pytest.raises(ProviderRequestError) as exc_info:
            await service.analyze("text", "claude")

        err = exc_info.value
        assert err.to_envelope() == {
            "status": 503,
            "message": "Claude API error: Overloaded",
            "provider": "claude",
        }
        assert isinstance(err.__cause__, ProviderError)

    @pytest.mark.asyncio
    async def test_status_is_inferred_from_message(self, make_provider, stub_providers):
        stub_providers["gemini"] = make_provider(
            "gemini", error=ProviderError(provider="gemini", message="Gemini API error: rate limit hit")
        )
        service = DocumentService(stub_providers)

        with pytest.raises(ProviderRequestError) as exc_info:
            await service.format_by_template("text", "template-1")

        assert exc_info.value.status == 429
        assert exc_info.value.provider == "gemini"

    @pytest.mark.asyncio
    async def test_blank_provider_error_gets_generic_message(self, make_provider, stub_providers):
        stub_providers["openai"] = make_provider("openai", error=ProviderError(provider="openai", message=""))
        service = DocumentService(stub_providers)

        with pytest.raises(ProviderRequestError) as exc_info:
            await service.format_by_template_as_document("text", "template-1", "openai")

        assert exc_info.value.status == 500
        assert exc_info.value.message == "Provider request failed: openai"

    @pytest.mark.asyncio
    async def test_non_provider_exception_is_not_classified(self, make_provider, stub_providers):
        stub_providers["openai"] = make_provider("openai", error=KeyError("internal detail"))
        service = DocumentService(stub_providers)

        with pytest.raises(KeyError):
            await service.analyze("text", "openai")

    @pytest.mark.asyncio
    async def test_overloaded_provider_on_document_path(self, make_provider, stub_providers):
        stub_providers["claude"] = make_provider(
            "claude",
            error=ProviderError(provider="claude", message="Claude API error: Overloaded", status=503),
        )
        service = DocumentService(stub_providers)

        with pytest.raises(ProviderRequestError) as exc_info:
            await service.format_by_template_as_document(
                "Original manuscript", "unknown-template-id", "claude"
            )

        assert exc_info.value.to_envelope() == {
            "status": 503,
            "message": "Claude API error: Overloaded",
            "provider": "claude",
        }
        assert stub_providers["claude"].calls == [
            ("format_article_for_template", "unknown-template-id", "Original manuscript")
        ]
