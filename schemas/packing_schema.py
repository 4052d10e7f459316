from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from schemas.gear_schema import GearItem


class GearSelection(BaseModel):
    """
    The gear chosen for one trip and how it is packed.

    `packed_items` maps a container's gear id to the ids packed inside it,
    in the order they were packed. Instances are never changed in place;
    every packing operation returns a new one.
    """
    model_config = ConfigDict(frozen=True)

    selected_gear_ids: List[str] = Field(default_factory=list)
    packed_items: Dict[str, List[str]] = Field(default_factory=dict)


class PackRequest(BaseModel):
    """Schema for packing a selected item into a selected container."""
    item_id: str
    container_id: str


class UnpackRequest(BaseModel):
    """Schema for taking an item out of a container."""
    item_id: str
    container_id: Optional[str] = None


class PackedContainer(BaseModel):
    """A selected container with the items packed in it."""
    container: GearItem
    packed_in: Optional[str] = None
    items: List[GearItem]
    item_count: int
    packed_weight: float


class LooseItem(BaseModel):
    """A selected item outside any bag, with the bags it could go into."""
    item: GearItem
    available_container_ids: List[str]


class PackingView(BaseModel):
    """Schema for returning a trip's gear list as it should be displayed."""
    trip_id: str
    selected_gear_ids: List[str]
    packed_items: Dict[str, List[str]]
    selected_items: List[GearItem]
    top_level_items: List[GearItem]
    containers: List[PackedContainer]
    loose_items: List[LooseItem]
    total_weight_grams: float
    total_weight_display: str
    has_unsaved_changes: bool
    is_saving: bool = False
