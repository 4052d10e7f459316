from pydantic import BaseModel, Field
from typing import Optional


class BikeBase(BaseModel):
    """Base schema for a bike."""
    name: str = Field(..., min_length=1, examples=["Touring rig"])
    brand: Optional[str] = Field(None, examples=["Surly"])
    model: Optional[str] = Field(None, examples=["Long Haul Trucker"])
    year: Optional[str] = Field(None, examples=["2021"])
    image_url: Optional[str] = None
    notes: Optional[str] = None


class BikeCreate(BikeBase):
    """Schema for adding a bike."""
    pass


class Bike(BikeBase):
    """Schema for returning a bike."""
    id: str
