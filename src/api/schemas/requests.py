"""Request schemas for the API."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CustomizeRequest(BaseModel):
    """Request model for applying a template and customization to a document.

    Attributes:
        template_id: Catalog id of the template to apply
        customizations: Customization fields (camelCase keys); missing fields default
    """

    model_config = ConfigDict(populate_by_name=True)

    template_id: int = Field(
        ...,
        validation_alias=AliasChoices("templateId", "template_id"),
        description="Template id from GET /api/templates",
    )
    customizations: Optional[dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("customizations", "customization"),
        description="Text and style choices for the cover page",
    )

    @field_validator("customizations", mode="before")
    @classmethod
    def default_empty(cls, value: Any) -> Any:
        return {} if value is None else value
