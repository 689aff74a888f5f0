"""Customization value object driving cover page generation."""

import json
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, Optional, Union

from src.core.defaults import (
    DEFAULT_BACKGROUND_OPACITY,
    DEFAULT_BACKGROUND_STYLE,
    DEFAULT_COLOR_SCHEME,
    DEFAULT_FONT_FAMILY,
    DEFAULT_TITLE_ALIGNMENT,
    DEFAULT_TITLE_SIZE,
)

# Stored/wire key -> attribute name. The blob format is camelCase.
_FIELD_KEYS = {
    "title": "title",
    "subtitle": "subtitle",
    "presenter": "presenter",
    "date": "date",
    "colorScheme": "color_scheme",
    "fontFamily": "font_family",
    "titleSize": "title_size",
    "titleAlignment": "title_alignment",
    "backgroundStyle": "background_style",
    "backgroundOpacity": "background_opacity",
    "templateId": "template_id",
}


@dataclass(frozen=True)
class Customization:
    """User-editable text and style choices for one cover page.

    Instances are never mutated; an edit produces a new instance that replaces
    the stored one wholesale.

    Attributes:
        title: Main heading text
        subtitle: Line drawn below the title
        presenter: Rendered as "Presented by: ..." when non-empty
        date: Free-text date line, rendered when non-empty
        color_scheme: Hex accent color (#RRGGBB)
        font_family: UI font label, mapped to a built-in PDF font
        title_size: Small / Medium / Large / Extra Large
        title_alignment: left / center / right
        background_style: Gradient hint (gradient1..gradient3)
        background_opacity: Gradient band opacity, 0-100
        template_id: Template the customization was applied with
    """

    title: str = ""
    subtitle: str = ""
    presenter: str = ""
    date: str = ""
    color_scheme: str = DEFAULT_COLOR_SCHEME
    font_family: str = DEFAULT_FONT_FAMILY
    title_size: str = DEFAULT_TITLE_SIZE
    title_alignment: str = DEFAULT_TITLE_ALIGNMENT
    background_style: str = DEFAULT_BACKGROUND_STYLE
    background_opacity: int = DEFAULT_BACKGROUND_OPACITY
    template_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Union[Mapping[str, Any], str, None]) -> "Customization":
        """Build a Customization from a stored blob or request payload.

        Accepts camelCase or snake_case keys, and a JSON string for blobs
        persisted as text. Unknown keys are ignored and missing ones default.
        """
        if data is None:
            return cls()
        if isinstance(data, str):
            data = json.loads(data) if data.strip() else {}
        if not isinstance(data, Mapping):
            raise ValueError("Customization blob must be a JSON object")

        values: dict[str, Any] = {}
        attr_names = set(_FIELD_KEYS.values())
        for key, raw in data.items():
            attr = _FIELD_KEYS.get(key, key if key in attr_names else None)
            if attr is None or raw is None:
                continue
            values[attr] = raw

        defaults = cls()
        for attr in ("title", "subtitle", "presenter", "date", "color_scheme",
                     "font_family", "title_size", "title_alignment", "background_style"):
            if attr in values:
                values[attr] = str(values[attr])
        if "background_opacity" in values:
            values["background_opacity"] = _coerce_opacity(
                values["background_opacity"], defaults.background_opacity
            )
        if "template_id" in values:
            try:
                values["template_id"] = int(values["template_id"])
            except (TypeError, ValueError):
                values["template_id"] = None

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase blob format."""
        attrs = asdict(self)
        return {key: attrs[attr] for key, attr in _FIELD_KEYS.items()}

    def with_template(self, template_id: int) -> "Customization":
        return replace(self, template_id=template_id)

    def merge_text(
        self,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        presenter: Optional[str] = None,
    ) -> "Customization":
        """Return a copy with the given text fields replaced (None keeps the current value)."""
        changes = {
            name: value
            for name, value in (("title", title), ("subtitle", subtitle), ("presenter", presenter))
            if value is not None
        }
        return replace(self, **changes)


def _coerce_opacity(value: Any, default: int) -> int:
    try:
        opacity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(0, min(100, opacity))
