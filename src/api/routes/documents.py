"""Document upload, customization, preview, download and analysis endpoints."""
import asyncio
import logging
from datetime import date
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from src.api.schemas.requests import CustomizeRequest
from src.api.schemas.responses import (
    AnalysisSummary,
    AnalyzeResponse,
    CustomizeResponse,
    DocumentResponse,
    UploadResponse,
)
from src.core.database import get_db
from src.core.user_context import get_request_user, require_request_user
from src.domain.customization import Customization
from src.services import document_service
from src.services.file_storage import DocumentFileStore, get_file_store
from src.services.suggestion_service import (
    Suggestion,
    SuggestionClient,
    extract_pdf_info,
    get_suggestion_client,
    suggested_customization,
)
from src.utils.error_handling import AppException, SuggestionUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _pdf_response(content: bytes, filename: str, disposition: str = "inline") -> Response:
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "").strip() or "document.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f'{disposition}; filename="{ascii_name}"; filename*=UTF-8\'\'{quote(filename)}'
            )
        },
    )


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
):
    """Upload a PDF and create its document record."""
    try:
        content = await file.read(file_store.max_upload_bytes + 1)
        document = await asyncio.to_thread(
            document_service.create_document,
            db,
            file_store,
            content,
            file.filename or "document.pdf",
            file.content_type,
            get_request_user(request),
        )
        return UploadResponse(message="File uploaded successfully", document_id=document.id)

    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading document: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload document",
        )


@router.get("/recent", response_model=List[DocumentResponse])
def get_recent_documents(
    user: str = Depends(require_request_user),
    db: Session = Depends(get_db),
):
    """Up to five most recent uploads of the calling user."""
    try:
        documents = document_service.get_recent_documents(db, owner_id=user)
        return [
            DocumentResponse.model_validate(document_service.document_to_dict(d))
            for d in documents
        ]
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error listing recent documents: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list recent documents",
        )


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: int, db: Session = Depends(get_db)):
    """Get a document with its current customization (null if never applied)."""
    try:
        document = document_service.get_document(db, document_id)
        return DocumentResponse.model_validate(document_service.document_to_dict(document))
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error getting document {document_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get document",
        )


@router.post("/{document_id}/customize", response_model=CustomizeResponse)
async def customize_document(
    document_id: int,
    request: CustomizeRequest,
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
):
    """Store a customization and generate the cover preview.

    Replaces any earlier customization of the document wholesale.
    """
    try:
        customization = Customization.from_dict(request.customizations)
        url = await asyncio.to_thread(
            document_service.apply_customization,
            db,
            file_store,
            document_id,
            request.template_id,
            customization,
        )
        return CustomizeResponse(message="Customizations applied successfully", preview_url=url)

    except AppException as e:
        if e.status_code >= 500:
            logger.error(
                f"Error customizing document {document_id}: {e.message}",
                extra={"document_id": document_id, "template_id": request.template_id},
            )
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error customizing document {document_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to apply customizations",
        )


@router.get("/{document_id}/cover-preview")
def get_cover_preview(
    document_id: int,
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
):
    """Last composed preview of the customized document."""
    try:
        document = document_service.get_document(db, document_id)
        content = file_store.read_preview(document.id)
        return _pdf_response(content, f"cover-{document.id}.pdf")
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error serving cover preview for {document_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load cover preview",
        )


@router.get("/{document_id}/preview")
def get_original_preview(
    document_id: int,
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
):
    """The uploaded original, unmodified."""
    try:
        document = document_service.get_document(db, document_id)
        content = file_store.read_original(document.stored_file_name)
        return _pdf_response(content, document.original_name)
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error serving original for {document_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load document",
        )


@router.get("/{document_id}/download")
async def download_document(
    document_id: int,
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
):
    """Compose the final PDF from the stored customization and send it as an attachment."""
    try:
        content, filename = await asyncio.to_thread(
            document_service.build_download, db, file_store, document_id
        )
        return _pdf_response(content, filename, disposition="attachment")
    except AppException as e:
        if e.status_code >= 500:
            logger.error(
                f"Error building download for {document_id}: {e.message}",
                extra={"document_id": document_id},
            )
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error building download for {document_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to download document",
        )


@router.get("/{document_id}/analyze", response_model=AnalyzeResponse)
async def analyze_document(
    document_id: int,
    db: Session = Depends(get_db),
    file_store: DocumentFileStore = Depends(get_file_store),
    client: SuggestionClient = Depends(get_suggestion_client),
):
    """Suggest cover text for a document.

    Suggestion failures never fail the request: the response then reports
    ``available: false`` with default values so the user can type their own.
    """
    try:
        document = document_service.get_document(db, document_id)
        original = file_store.read_original(document.stored_file_name)
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    try:
        text = await asyncio.to_thread(extract_pdf_info, original)
        suggestion = await asyncio.to_thread(client.suggest, text)
        available = True
        message = "Analysis complete"
    except SuggestionUnavailable as e:
        logger.warning(
            "Suggestion unavailable, falling back to defaults",
            extra={"document_id": document_id, "reason": e.message},
        )
        suggestion = Suggestion()
        available = False
        message = e.message
    except Exception as e:
        logger.error(f"Unexpected error analyzing document {document_id}: {e}", exc_info=True)
        suggestion = Suggestion()
        available = False
        message = "Content suggestions are currently unavailable"

    values = suggested_customization(suggestion, date.today()).to_dict()
    return AnalyzeResponse(
        document_id=document_id,
        available=available,
        suggested_values=values,
        analysis=AnalysisSummary(
            summary=suggestion.professional_summary,
            key_phrases=suggestion.key_phrases,
        ),
        message=message,
    )
