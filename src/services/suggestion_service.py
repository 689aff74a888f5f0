"""Cover content suggestions from an Azure OpenAI chat deployment.

Suggestions are an input assist only. Every failure (missing credentials,
network errors, timeouts, unusable model output) raises SuggestionUnavailable
so callers can fall back to manual entry without blocking composition.
"""

import io
import json
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

import httpx
from pypdf import PdfReader

from src.config.settings import get_settings
from src.domain.customization import Customization
from src.utils.error_handling import SuggestionUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTED_TITLE = "Professional Presentation"
DEFAULT_SUGGESTED_SUBTITLE = "Industry Insights & Analysis"
MAX_PAGE_TEXT_CHARS = 2000

SYSTEM_PROMPT = (
    "You are an AI assistant specializing in optimizing content for LinkedIn sharing. "
    "Analyze the given text and extract or generate the following elements optimized "
    "for professional LinkedIn sharing: "
    "1. A compelling title (max 50 chars) "
    "2. An engaging subtitle (max 80 chars) "
    "3. The presenter name (if found in text) "
    "4. A professional summary (max 200 chars) "
    "5. 5-7 key phrases or topics from the content "
    "Respond in JSON format with these fields: title, subtitle, presenter, "
    "professionalSummary, keyPhrases (array)."
)

UNREADABLE_PDF_TEXT = (
    "Unable to extract PDF information. Please generate specific, non-generic "
    "content based on the document subject matter."
)


@dataclass(frozen=True)
class Suggestion:
    """Suggested cover text, shaped like the customization text fields."""

    title: str = DEFAULT_SUGGESTED_TITLE
    subtitle: str = DEFAULT_SUGGESTED_SUBTITLE
    presenter: str = ""
    professional_summary: str = ""
    key_phrases: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Suggestion":
        key_phrases = data.get("keyPhrases")
        return cls(
            title=str(data.get("title") or DEFAULT_SUGGESTED_TITLE),
            subtitle=str(data.get("subtitle") or DEFAULT_SUGGESTED_SUBTITLE),
            presenter=str(data.get("presenter") or ""),
            professional_summary=str(data.get("professionalSummary") or ""),
            key_phrases=[str(p) for p in key_phrases] if isinstance(key_phrases, list) else [],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "presenter": self.presenter,
            "professionalSummary": self.professional_summary,
            "keyPhrases": list(self.key_phrases),
        }


def extract_pdf_info(pdf_bytes: bytes) -> str:
    """Summarize PDF metadata and first-page text into a prompt for the model."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        metadata = reader.metadata
        total_pages = len(reader.pages)

        title = (metadata.title if metadata else None) or "Untitled Document"
        author = (metadata.author if metadata else None) or "Unknown Author"
        subject = (metadata.subject if metadata else None) or ""
        keywords = (metadata.get("/Keywords") if metadata else None) or ""
        creator = (metadata.creator if metadata else None) or ""

        first_page = reader.pages[0] if total_pages else None
        page_text = ""
        if first_page is not None:
            width = float(first_page.mediabox.width)
            height = float(first_page.mediabox.height)
            page_text = f"\nThe first page has dimensions of {width:.2f} x {height:.2f} points.\n"
            extracted = (first_page.extract_text() or "").strip()
            if extracted:
                page_text += f"\nFirst page text:\n{extracted[:MAX_PAGE_TEXT_CHARS]}\n"
    except Exception as e:
        logger.warning(f"Error extracting PDF information: {e}")
        return UNREADABLE_PDF_TEXT

    lines = [
        "PDF Document Information:",
        f"Title: {title}",
        f"Author: {author}",
    ]
    if subject:
        lines.append(f"Subject: {subject}")
    if keywords:
        lines.append(f"Keywords: {keywords}")
    lines.append(f"Total Pages: {total_pages}")

    summary = f"This is a {total_pages}-page document"
    if title != "Untitled Document":
        summary += f' titled "{title}"'
    if author != "Unknown Author":
        summary += f" by {author}"
    lines.append(f"\n{summary}.")

    if creator:
        lines.append(f"\nCreated using: {creator}")

    text = "\n".join(lines) + "\n" + page_text
    text += (
        "\nImportant: Please create a SPECIFIC title and subtitle for this document "
        "based on its metadata. Do NOT generate generic titles unless the document "
        "is actually about that topic.\n"
    )
    return text


class SuggestionClient:
    """Minimal Azure OpenAI chat-completions client for cover suggestions."""

    def __init__(
        self,
        endpoint: Optional[str],
        api_key: Optional[str],
        deployment: str = "gpt-4o",
        api_version: str = "2023-05-15",
        timeout: float = 30.0,
        temperature: float = 0.7,
        max_tokens: int = 500,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/") if endpoint else None
        self.api_key = api_key
        self.deployment = deployment
        self.api_version = api_version
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.endpoint and self.api_key)

    @property
    def url(self) -> str:
        return (
            f"{self.endpoint}/openai/deployments/{self.deployment}/chat/completions"
            f"?api-version={self.api_version}"
        )

    def suggest(self, text: str) -> Suggestion:
        """Ask the model for cover content.

        Raises:
            SuggestionUnavailable: On any failure, including missing credentials
        """
        if not self.configured:
            raise SuggestionUnavailable(
                "Azure OpenAI API key or endpoint not configured",
                details={"missing_credentials": True},
            )

        payload = {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": (
                        "Please analyze the following PDF content and generate "
                        f"LinkedIn-optimized suggestions:\n\n{text}"
                    ),
                },
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "response_format": {"type": "json_object"},
        }

        logger.debug("Requesting cover suggestion", extra={"deployment": self.deployment})
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.url,
                    json=payload,
                    headers={"api-key": self.api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Azure OpenAI request failed: {e}")
            raise SuggestionUnavailable(f"Suggestion service request failed: {e}") from e
        except ValueError as e:
            raise SuggestionUnavailable("Suggestion service returned invalid JSON") from e

        try:
            content = data["choices"][0]["message"]["content"]
            parsed = json.loads(content)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning(f"Unusable response from Azure OpenAI: {e}")
            raise SuggestionUnavailable("No valid response from suggestion service") from e

        if not isinstance(parsed, dict):
            raise SuggestionUnavailable("Suggestion service response is not a JSON object")

        return Suggestion.from_payload(parsed)


def get_suggestion_client() -> SuggestionClient:
    """FastAPI dependency building the client from settings and env secrets."""
    settings = get_settings()
    return SuggestionClient(
        endpoint=settings.azure_openai_endpoint,
        api_key=settings.azure_openai_api_key,
        deployment=settings.suggestion.deployment,
        api_version=settings.suggestion.api_version,
        timeout=settings.suggestion.timeout,
        temperature=settings.suggestion.temperature,
        max_tokens=settings.suggestion.max_tokens,
    )


def format_long_date(day: date) -> str:
    """'January 5, 2024' style date."""
    return f"{day:%B} {day.day}, {day.year}"


def suggested_customization(suggestion: Suggestion, today: Optional[date] = None) -> Customization:
    """Merge a suggestion into a default customization draft."""
    today = today or date.today()
    draft = Customization(date=format_long_date(today))
    return draft.merge_text(
        title=suggestion.title,
        subtitle=suggestion.subtitle,
        presenter=suggestion.presenter,
    )
