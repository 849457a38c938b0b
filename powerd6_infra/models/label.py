"""Issue label definitions shared by every managed repository."""
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from powerd6_infra.utils.slugify import slugify

COLOR_PATTERN = re.compile(r'^[0-9a-fA-F]{6}$')


class LabelDefinition(BaseModel):
    """A single issue label: name, description and a 6 hex digit color."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    name: str = Field(..., description="Display name of the label")
    description: str = Field(default="", description="Description shown next to the label")
    color: str = Field(..., description="Color as six hex digits, without a leading '#'")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Label name cannot be empty")
        return v.strip()

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Accept '#abcdef' or 'abcdef', store lowercase without the '#'."""
        v = v.strip().lstrip('#')
        if not COLOR_PATTERN.match(v):
            raise ValueError(f"Label color must be six hex digits, got {v!r}")
        return v.lower()

    @property
    def slug(self) -> str:
        """Identifier-safe form of the name, used in resource ids."""
        return slugify(self.name)
