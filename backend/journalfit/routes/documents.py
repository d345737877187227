"""
JournalFit Backend — Document Route Handlers
==============================================

What:  POST /documents/analyze, /documents/generate-by-template and
       /documents/generate-by-template-docx.
How:   Validate the body (Pydantic), delegate to DocumentService, shape the
       response. Provider failures raise ProviderRequestError, rendered by
       the global handler as {"message", "provider"} with the classified status.
"""

import logging

from fastapi import APIRouter, Response
from starlette.concurrency import run_in_threadpool

from journalfit.schemas.document import (
    AnalyzeDocumentRequest,
    AnalyzeDocumentResponse,
    ErrorResponse,
    GenerateByTemplateRequest,
    GenerateByTemplateResponse,
)
from journalfit.services.document_service import document_service
from journalfit.services.docx_service import DOCX_MEDIA_TYPE, text_to_docx_bytes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])

PROVIDER_ERROR_RESPONSES = {
    400: {"description": "Invalid request body", "model": ErrorResponse},
    401: {"description": "Provider rejected the credentials", "model": ErrorResponse},
    429: {"description": "Provider rate limit hit", "model": ErrorResponse},
    500: {"description": "Provider request failed", "model": ErrorResponse},
    503: {"description": "Provider overloaded or unavailable", "model": ErrorResponse},
}


@router.post(
    "/analyze",
    response_model=AnalyzeDocumentResponse,
    responses=PROVIDER_ERROR_RESPONSES,
    summary="Recommend journals for a manuscript",
    description=(
        "Sends the first 6000 characters of the manuscript to the selected AI "
        "provider and returns up to three journal recommendations. An empty "
        "list means the provider answered but its output was unusable."
    ),
)
async def analyze_document(body: AnalyzeDocumentRequest) -> AnalyzeDocumentResponse:
    logger.info(
        "Analyze request: %d chars, aiProvider=%s",
        len(body.document_content),
        body.ai_provider or "default",
    )
    return await document_service.analyze(body.document_content, body.ai_provider)


@router.post(
    "/generate-by-template",
    response_model=GenerateByTemplateResponse,
    responses=PROVIDER_ERROR_RESPONSES,
    summary="Format a manuscript for a journal template",
    description=(
        "Rewrites or restructures the manuscript to match the template's "
        "guidelines. Rewrite providers return the article text; the "
        "structured provider returns a JSON document of title and sections."
    ),
)
async def generate_by_template(body: GenerateByTemplateRequest) -> GenerateByTemplateResponse:
    logger.info(
        "Format request: %d chars, templateId=%s, aiProvider=%s",
        len(body.document_content),
        body.template_id,
        body.ai_provider or "default",
    )
    return await document_service.format_by_template(
        body.document_content, body.template_id, body.ai_provider
    )


@router.post(
    "/generate-by-template-docx",
    responses={
        200: {
            "description": "Formatted manuscript as a Word document",
            "content": {DOCX_MEDIA_TYPE: {}},
        },
        **PROVIDER_ERROR_RESPONSES,
    },
    response_class=Response,
    summary="Format a manuscript and download it as .docx",
)
async def generate_by_template_docx(body: GenerateByTemplateRequest) -> Response:
    result = await document_service.format_by_template_as_document(
        body.document_content, body.template_id, body.ai_provider
    )
    # python-docx is synchronous and slow on long manuscripts
    content = await run_in_threadpool(text_to_docx_bytes, result.content)

    logger.info("Generated %s (%d bytes)", result.suggested_file_name, len(content))
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{result.suggested_file_name}"'
        },
    )
