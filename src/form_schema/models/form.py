"""
Form structure models: schema, pages and layout.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from form_schema.models.fields import FormField


class ThemeType(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class SpacingType(str, Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    SPACIOUS = "spacious"


class PageModeType(str, Enum):
    SINGLE_PAGE = "single_page"
    MULTIPAGE = "multipage"


class FormLayout(BaseModel):
    """
    Visual layout of a form.

    Stored layouts are kept as-is: values are plain strings (not the enums)
    and unknown keys are preserved, because persisted layouts predate some
    of the enum values. Use ``validate_form_layout`` to check one.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    theme: str = Field(default=ThemeType.LIGHT.value, description="light, dark or auto")
    text_color: str = Field(default="#000000", alias="textColor")
    spacing: str = Field(default=SpacingType.NORMAL.value, description="compact, normal or spacious")
    code: str = Field(default="L1", description="Layout code, L1-L9")
    content: str = Field(default="", description="Rich text content of the layout")
    custom_back_ground_color: str = Field(default="#ffffff", alias="customBackGroundColor")
    custom_cta_button_name: str | None = Field(default=None, alias="customCTAButtonName")
    background_image_key: str = Field(default="", alias="backgroundImageKey")
    page_mode: str = Field(default=PageModeType.MULTIPAGE.value, alias="pageMode")
    is_custom_background_color_enabled: bool | None = Field(
        default=None, alias="isCustomBackgroundColorEnabled"
    )


class FormPage(BaseModel):
    """A page of fields, rendered in list order."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    id: str = Field(..., description="Page id")
    title: str = Field(default="", description="Page title")
    fields: list[SerializeAsAny[FormField]] = Field(default_factory=list)
    order: int = Field(default=0, description="Position of the page within the form")

    def get_field(self, field_id: str) -> FormField | None:
        """Get a field of this page by id."""
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def field_ids(self) -> list[str]:
        """Get the ids of this page's fields in order."""
        return [field.id for field in self.fields]


class FormSchema(BaseModel):
    """Complete form definition: pages, layout and shuffle flag."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    pages: list[FormPage] = Field(default_factory=list)
    layout: FormLayout = Field(default_factory=FormLayout)
    is_shuffle_enabled: bool = Field(default=False, alias="isShuffleEnabled")

    def get_page(self, page_id: str) -> FormPage | None:
        """Get a page by id."""
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def all_fields(self) -> list[FormField]:
        """Get every field of every page, in page order."""
        return [field for page in self.pages for field in page.fields]
