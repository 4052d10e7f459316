from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from schemas.gear_schema import GearCategoryGroup, GearItem, GearItemCreate, GearItemUpdate
from core.dependencies import get_draft_service, get_gear_service
from core.exceptions import NotFoundError
from services import packing_service
from services.gear_draft_service import GearDraftService
from services.gear_service import GearService

router = APIRouter(
    prefix="/gear",
    tags=["Gear"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[GearItem])
def list_gear(gear_service: GearService = Depends(get_gear_service)):
    """Retrieves the whole gear library."""
    return gear_service.list_gear()


@router.get("/grouped", response_model=List[GearCategoryGroup])
def list_gear_by_category(gear_service: GearService = Depends(get_gear_service)):
    """
    Retrieves the gear library grouped by category.
    Categories are alphabetical with Miscellaneous last; items are sorted by name.
    """
    groups = packing_service.grouped_by_category(gear_service.list_gear())
    return [GearCategoryGroup(category=category, items=items) for category, items in groups]


@router.get("/{gear_id}", response_model=GearItem)
def get_gear_item(gear_id: str, gear_service: GearService = Depends(get_gear_service)):
    try:
        return gear_service.get_gear(gear_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=GearItem, status_code=status.HTTP_201_CREATED)
def add_gear_item(item: GearItemCreate, gear_service: GearService = Depends(get_gear_service)):
    """Adds a new item or bag to the gear library."""
    return gear_service.add_gear(item)


@router.put("/{gear_id}", response_model=GearItem)
def update_gear_item(
    gear_id: str,
    item: GearItemUpdate,
    gear_service: GearService = Depends(get_gear_service),
    drafts: GearDraftService = Depends(get_draft_service),
):
    """
    Replaces a gear item's details.
    Turning a bag into a plain item unpacks whatever was in it on every trip.
    Turning an item into a bag takes it out of any bag that is itself packed.
    """
    try:
        was_container = gear_service.get_gear(gear_id).is_container
        updated = gear_service.update_gear(gear_id, item)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if was_container and not updated.is_container:
        drafts.release_container(gear_id)
    elif updated.is_container and not was_container:
        drafts.unnest_container(gear_id)
    return updated


@router.delete("/{gear_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gear_item(
    gear_id: str,
    gear_service: GearService = Depends(get_gear_service),
    drafts: GearDraftService = Depends(get_draft_service),
):
    """Deletes a gear item and removes it from every trip's gear list."""
    try:
        gear_service.delete_gear(gear_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    drafts.remove_gear(gear_id)
