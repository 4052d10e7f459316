from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_CATEGORY = "Miscellaneous"


class ItemType(str, Enum):
    """Whether a gear item can hold other gear items."""
    ITEM = "item"
    CONTAINER = "container"


class GearItemBase(BaseModel):
    """Base schema for a gear item, containing common fields."""
    name: str = Field(..., min_length=1, examples=["Tent"])
    weight: float = Field(..., gt=0, description="Weight in grams", examples=[2200])
    image_url: Optional[str] = Field(None, examples=["https://example.com/tent.jpg"])
    notes: str = Field("", examples=["Two person, freestanding"])
    item_type: ItemType = ItemType.ITEM
    category: str = Field(DEFAULT_CATEGORY, examples=["Sleeping"])

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank.")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value):
        if value is None or not str(value).strip():
            return DEFAULT_CATEGORY
        return str(value).strip()

    @field_validator("notes", mode="before")
    @classmethod
    def _empty_notes(cls, value):
        return value or ""


class GearItemCreate(GearItemBase):
    """Schema for adding a gear item to the library."""
    pass


class GearItemUpdate(GearItemBase):
    """Schema for replacing an existing gear item's fields."""
    pass


class GearItem(GearItemBase):
    """Schema for returning a gear item from the library."""
    id: str

    @property
    def is_container(self) -> bool:
        return self.item_type == ItemType.CONTAINER


class GearCategoryGroup(BaseModel):
    """A category of the gear library with its items sorted by name."""
    category: str
    items: List[GearItem]
