"""
JournalFit Backend — Application Package Initializer
======================================================

What: Marks the `journalfit` directory as a Python package.
Why:  Enables module imports like `from journalfit.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a thin layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     DocumentService (Orchestrator)  │  ← provider selection, error envelope
    ├─────────────────────────────────────┤
    │   Provider services (OpenAI/Claude/ │  ← prompt, one SDK call, parse/validate
    │   Gemini) + Guideline store         │
    ├─────────────────────────────────────┤
    │        Schemas (API + payloads)     │  ← Pydantic models
    └─────────────────────────────────────┘

    There is no persistence layer: every request is stateless.
"""

__version__ = "1.0.0"
