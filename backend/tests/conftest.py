"""
JournalFit Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

No test talks to a real provider: SDK clients are replaced with AsyncMock
objects, and the orchestrator is built from StubProvider instances.

Fixture Hierarchy (all function-scoped):
    ├── sample_article: A short manuscript
    ├── long_article: A manuscript longer than both prompt budgets
    ├── journals_json: A valid provider answer with two journals
    ├── three_journals: Three well-formed Journal objects
    ├── stub_providers: One StubProvider per provider tag
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import json
import os

# Set before any journalfit import: settings and SDK clients read these at import time
os.environ["OPENAI_API_KEY"] = "test-openai-key-not-real"
os.environ["ANTHROPIC_API_KEY"] = "test-anthropic-key-not-real"
os.environ["GEMINI_API_KEY"] = "test-gemini-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from journalfit.schemas.document import (  # noqa: E402
    FormattedArticle,
    Journal,
    RewrittenArticle,
)
from journalfit.services.llm_base import LLMService  # noqa: E402


class StubProvider(LLMService):
    """
    Deterministic in-memory provider.

    Returns the canned journals / article, or raises `error` from both
    operations when one is set. Records every call for assertions.
    """

    def __init__(
        self,
        provider: str,
        journals: Optional[List[Journal]] = None,
        article: Optional[FormattedArticle] = None,
        error: Optional[Exception] = None,
        configured: bool = True,
    ):
        self.provider = provider
        self.label = provider.title()
        self.journals = journals or []
        self.article = article
        self.error = error
        self.configured = configured
        self.calls = []

    async def recommend_journals(self, document_text: str) -> List[Journal]:
        self.calls.append(("recommend_journals", document_text))
        if self.error:
            raise self.error
        return list(self.journals)

    async def format_article_for_template(self, template_id: str, article_text: str):
        self.calls.append(("format_article_for_template", template_id, article_text))
        if self.error:
            raise self.error
        if self.article is not None:
            return self.article
        return RewrittenArticle(updated_article_text=f"[{template_id}] {article_text}")

    def is_configured(self) -> bool:
        return self.configured


@pytest.fixture
def sample_article():
    return (
        "Deep Learning for Early Tumor Detection\n\n"
        "Abstract\nThis paper studies convolutional networks applied to screening "
        "mammography across three hospital cohorts.\n\n"
        "Methods\nWe trained on 40,000 de-identified images."
    )


@pytest.fixture
def long_article():
    """15,000 characters: longer than both the 6000 and 12000 budgets."""
    return "".join(chr(ord("a") + i % 26) for i in range(15_000))


@pytest.fixture
def journals_json():
    return json.dumps(
        {
            "journals": [
                {
                    "id": "1",
                    "name": "Radiology",
                    "reason": "Imaging-focused methodology",
                    "description": "Flagship journal of the RSNA",
                    "templateId": "template-1",
                },
                {
                    "id": "2",
                    "name": "Ca-A Cancer Journal for Clinicians",
                    "reason": "Clinical cancer audience",
                    "description": "ACS review journal",
                    "templateId": "Ca-A Cancer Journal for Clinicians",
                },
            ]
        }
    )


@pytest.fixture
def three_journals():
    return [
        Journal(
            id=str(i),
            name=f"Journal {i}",
            reason=f"Reason {i}",
            description=f"Description {i}",
            template_id=f"template-{i}",
        )
        for i in range(1, 4)
    ]


@pytest.fixture
def stub_providers():
    return {
        "openai": StubProvider("openai"),
        "claude": StubProvider("claude"),
        "gemini": StubProvider("gemini"),
    }


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight to the FastAPI app.

    Lifespan does not run under ASGITransport, so no startup validation.
    Unhandled exceptions come back as the 500 response the app sent
    instead of being re-raised into the test.
    """
    from journalfit.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_provider():
    """Factory for StubProvider, so tests need not import conftest."""
    return StubProvider
