"""Template catalog queries and seeding."""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.defaults import DEFAULT_TEMPLATES
from src.database.models.template import Template
from src.utils.error_handling import StorageUnavailable, TemplateNotFound

logger = logging.getLogger(__name__)


def list_templates(db: Session) -> List[Template]:
    try:
        return db.query(Template).order_by(Template.id).all()
    except SQLAlchemyError as e:
        raise StorageUnavailable(f"Failed to list templates: {e}") from e


def find_template(db: Session, template_id: int) -> Optional[Template]:
    try:
        return db.query(Template).filter(Template.id == template_id).first()
    except SQLAlchemyError as e:
        raise StorageUnavailable(f"Failed to load template {template_id}: {e}") from e


def get_template(db: Session, template_id: Optional[int]) -> Template:
    """Load a template or raise TemplateNotFound."""
    template = find_template(db, template_id) if template_id is not None else None
    if template is None:
        raise TemplateNotFound(
            f"Template {template_id} not found",
            details={"template_id": template_id},
        )
    return template


def seed_templates(db: Session) -> int:
    """Insert the default catalog if the table is empty.

    Returns:
        Number of templates created (0 when already seeded)
    """
    if db.query(Template).count() > 0:
        logger.info("Templates already exist, skipping seed")
        return 0

    for data in DEFAULT_TEMPLATES:
        db.add(Template(**data))
    db.commit()

    logger.info(f"Seeded {len(DEFAULT_TEMPLATES)} templates")
    return len(DEFAULT_TEMPLATES)


def template_to_dict(template: Template) -> dict:
    return {
        "id": template.id,
        "name": template.name,
        "imagePath": template.image_path,
        "category": template.category,
    }
