"""Template catalog endpoint."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.schemas.responses import TemplateResponse
from src.core.database import get_db
from src.services import template_service
from src.utils.error_handling import AppException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
def list_templates(db: Session = Depends(get_db)):
    """List all cover templates."""
    try:
        return [
            TemplateResponse.model_validate(template_service.template_to_dict(t))
            for t in template_service.list_templates(db)
        ]
    except AppException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error listing templates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list templates",
        )
