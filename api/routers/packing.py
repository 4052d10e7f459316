from fastapi import APIRouter, Depends, HTTPException, status

from schemas.packing_schema import PackingView, PackRequest, UnpackRequest
from core.dependencies import get_draft_service
from core.exceptions import NotFoundError, PersistenceError, SaveInProgressError
from services.gear_draft_service import GearDraftService

router = APIRouter(
    prefix="/packing",
    tags=["packing"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{trip_id}", response_model=PackingView)
def get_packing(trip_id: str, drafts: GearDraftService = Depends(get_draft_service)):
    """
    Retrieves the trip's gear list: bags with their contents, loose items,
    total weight and whether there are unsaved changes.
    """
    try:
        return drafts.view(trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{trip_id}/toggle/{gear_id}", response_model=PackingView)
def toggle_gear(trip_id: str, gear_id: str, drafts: GearDraftService = Depends(get_draft_service)):
    """Adds a gear item to the trip, or removes it (and unpacks it) if already selected."""
    try:
        return drafts.toggle(trip_id, gear_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{trip_id}/pack", response_model=PackingView)
def pack_item(trip_id: str, request: PackRequest, drafts: GearDraftService = Depends(get_draft_service)):
    """
    Packs a selected item into a selected bag.
    Requests that break a packing rule are ignored and the gear list is returned unchanged.
    """
    try:
        return drafts.pack(trip_id, request.item_id, request.container_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{trip_id}/unpack", response_model=PackingView)
def unpack_item(trip_id: str, request: UnpackRequest, drafts: GearDraftService = Depends(get_draft_service)):
    """Takes an item out of its bag. Without a container id, whichever bag holds it is used."""
    try:
        return drafts.unpack(trip_id, request.item_id, request.container_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{trip_id}/save", response_model=PackingView)
async def save_packing(trip_id: str, drafts: GearDraftService = Depends(get_draft_service)):
    """Saves the trip's gear selection and packing."""
    try:
        return await drafts.save(trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SaveInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=502, detail="Could not save gear selections.")


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_changes(trip_id: str, drafts: GearDraftService = Depends(get_draft_service)):
    """Throws away unsaved gear changes for the trip."""
    drafts.discard(trip_id)
