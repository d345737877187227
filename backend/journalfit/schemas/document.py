"""
JournalFit Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models for the HTTP contract and for provider output payloads.
Why:   One set of models validates request bodies, shapes responses, and
       checks the JSON a model returns before any of it reaches the client.
How:   Fields are snake_case in Python and camelCase on the wire (aliases).
       `populate_by_name` lets services construct models with either spelling.

Two families live here:
    - API models (AnalyzeDocumentRequest, ..., ErrorResponse)
    - Provider payloads (JournalsPayload, StructuredArticle, RewrittenArticle)
      used to validate model output. Their required fields are stricter than
      the API's Journal model.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

AIProvider = Literal["openai", "claude", "gemini"]

_CAMEL = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Journal Recommendations
# ══════════════════════════════════════════════════════════════════════════


class Journal(BaseModel):
    """
    A recommended publication venue as returned to the client.

    `id` is provider-assigned and only unique within one response.
    `template_id` is meant to match a guideline key but may not.
    """

    model_config = _CAMEL

    id: str = Field(description="Provider-assigned identifier (unique per response)")
    name: str = Field(description="Display name of the journal")
    reason: Optional[str] = Field(default=None, description="Why the journal fits")
    description: Optional[str] = Field(default=None, description="Short journal description")
    template_id: str = Field(alias="templateId", description="Guideline template identifier")


class StrictJournal(Journal):
    """Journal as a provider must return it: every field present."""

    reason: str
    description: str


class JournalsPayload(BaseModel):
    """Top-level JSON object a provider returns for recommendations."""

    journals: List[StrictJournal]


# ══════════════════════════════════════════════════════════════════════════
# Formatted Article Results
# ══════════════════════════════════════════════════════════════════════════


class ArticleSection(BaseModel):
    heading: str
    content: str


class StructuredArticle(BaseModel):
    """Variant A: the article re-emitted as a title plus ordered sections."""

    title: str
    sections: List[ArticleSection]


class RewrittenArticle(BaseModel):
    """Variant B: the whole article rewritten in place."""

    model_config = _CAMEL

    updated_article_text: str = Field(alias="updatedArticleText")
    change_summary: Optional[str] = Field(default=None, alias="changeSummary")
    warnings: Optional[List[str]] = None


FormattedArticle = Union[StructuredArticle, RewrittenArticle]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AnalyzeDocumentRequest(BaseModel):
    """
    Body of POST /documents/analyze.

    `ai_provider` is a plain string on purpose: an unrecognized value falls
    back to the default provider instead of failing validation.
    """

    model_config = _CAMEL

    document_content: str = Field(alias="documentContent", min_length=1)
    ai_provider: Optional[str] = Field(default=None, alias="aiProvider")


class GenerateByTemplateRequest(BaseModel):
    """Body of both generate-by-template endpoints."""

    model_config = _CAMEL

    document_content: str = Field(alias="documentContent", min_length=1)
    template_id: str = Field(alias="templateId", min_length=1)
    ai_provider: Optional[str] = Field(default=None, alias="aiProvider")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AnalyzeDocumentResponse(BaseModel):
    journals: List[Journal]


class GenerateByTemplateResponse(BaseModel):
    model_config = _CAMEL

    formatted_document: str = Field(alias="formattedDocument")


class ErrorResponse(BaseModel):
    """
    Error body for every failed request.

    Provider failures always carry `provider`; request validation failures
    carry `details` instead.
    """

    message: str = Field(description="Human-readable error description")
    provider: Optional[str] = Field(default=None, description="Provider that failed")
    details: Optional[list] = Field(default=None, description="Field-level validation errors")


class HealthResponse(BaseModel):
    """Service status. Provider state is configuration only; no network probe."""

    model_config = _CAMEL

    status: str = Field(description="healthy or degraded")
    version: str
    default_provider: str = Field(alias="defaultProvider")
    providers: Dict[str, str] = Field(description="configured / missing_key per provider")
    uptime_seconds: float = Field(alias="uptimeSeconds")
