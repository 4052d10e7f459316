from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from schemas.bike_schema import Bike, BikeCreate
from core.dependencies import get_bike_service
from core.exceptions import NotFoundError
from services.bike_service import BikeService

router = APIRouter(
    prefix="/bikes",
    tags=["Bikes"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[Bike])
def list_bikes(bike_service: BikeService = Depends(get_bike_service)):
    return bike_service.list_bikes()


@router.get("/{bike_id}", response_model=Bike)
def get_bike(bike_id: str, bike_service: BikeService = Depends(get_bike_service)):
    try:
        return bike_service.get_bike(bike_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Bike, status_code=status.HTTP_201_CREATED)
def add_bike(bike: BikeCreate, bike_service: BikeService = Depends(get_bike_service)):
    return bike_service.add_bike(bike)


@router.put("/{bike_id}", response_model=Bike)
def update_bike(bike_id: str, bike: BikeCreate, bike_service: BikeService = Depends(get_bike_service)):
    try:
        return bike_service.update_bike(bike_id, bike)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{bike_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bike(bike_id: str, bike_service: BikeService = Depends(get_bike_service)):
    """Deletes a bike. Trips that used it are left without a bike."""
    try:
        bike_service.delete_bike(bike_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
