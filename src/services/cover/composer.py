"""Assemble the output PDF: generated cover followed by the original pages."""

import io
import logging
from enum import Enum
from typing import Union

from pypdf import PdfReader, PdfWriter
from reportlab.lib.pagesizes import LETTER

from src.domain.customization import Customization
from src.services.cover.templates import PageSize, render_cover
from src.utils.error_handling import (
    MalformedSourceDocument,
    RenderingFailure,
    format_exception_for_logging,
)

logger = logging.getLogger(__name__)


class ReassemblyPolicy(str, Enum):
    """Where the generated cover goes relative to the original pages."""

    REPLACE_FIRST = "replace_first"  # cover takes the place of page 1
    PREPEND = "prepend"  # cover goes in front of all original pages


def load_source(original_pdf: bytes) -> PdfReader:
    """Parse the uploaded original.

    Raises:
        MalformedSourceDocument: Bytes are not a readable PDF or have no pages
    """
    try:
        reader = PdfReader(io.BytesIO(original_pdf))
        page_count = len(reader.pages)
    except Exception as e:
        # pypdf raises anything from PdfReadError to ValueError/KeyError on corrupt input
        raise MalformedSourceDocument(
            "Uploaded file is not a readable PDF",
            details={"reason": str(e)},
        ) from e

    if page_count == 0:
        raise MalformedSourceDocument("Uploaded PDF has no pages")

    return reader


def copied_page_indices(page_count: int, policy: ReassemblyPolicy) -> range:
    """Indices of original pages that follow the cover, in original order."""
    page_count = max(page_count, 0)
    start = 1 if policy is ReassemblyPolicy.REPLACE_FIRST else 0
    return range(min(start, page_count), page_count)


def compose(
    original_pdf: bytes,
    template_name: str,
    customization: Customization,
    policy: Union[ReassemblyPolicy, str] = ReassemblyPolicy.REPLACE_FIRST,
    page_size: PageSize = LETTER,
) -> bytes:
    """Build the final document for an (original, template, customization) triple.

    The result depends only on the inputs, so it is regenerated on every
    download instead of being cached.

    Args:
        original_pdf: Bytes of the uploaded PDF
        template_name: Template catalog name; unknown names use the default look
        customization: Text and style choices for the cover
        policy: Page reassembly policy
        page_size: Cover page size in points

    Returns:
        Serialized output PDF

    Raises:
        MalformedSourceDocument: The original cannot be parsed or copied
        RenderingFailure: Drawing the cover failed unexpectedly
    """
    policy = ReassemblyPolicy(policy)
    source = load_source(original_pdf)

    try:
        cover_pdf = render_cover(template_name, customization, page_size)
        cover_page = PdfReader(io.BytesIO(cover_pdf)).pages[0]
    except Exception as e:
        logger.error(
            "Failed to render cover page",
            extra={
                "template_name": template_name,
                "customization": customization.to_dict(),
                **format_exception_for_logging(e),
            },
            exc_info=True,
        )
        raise RenderingFailure(
            f"Failed to render cover page for template '{template_name}'",
            details={"template_name": template_name},
        ) from e

    source_pages = len(source.pages)
    try:
        writer = PdfWriter()
        writer.add_page(cover_page)
        for index in copied_page_indices(source_pages, policy):
            writer.add_page(source.pages[index])

        buffer = io.BytesIO()
        writer.write(buffer)
    except Exception as e:
        raise MalformedSourceDocument(
            "Could not copy pages from the uploaded PDF",
            details={"reason": str(e)},
        ) from e

    logger.info(
        "Composed document",
        extra={
            "template_name": template_name,
            "policy": policy.value,
            "source_pages": source_pages,
            "output_pages": len(writer.pages),
        },
    )
    return buffer.getvalue()
