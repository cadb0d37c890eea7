"""
Destination Schemas
"""
from pydantic import BaseModel
from typing import Optional


class DestinationResponse(BaseModel):
    """Schema for a catalog destination"""
    id: int
    name: str
    region: str = ""
    country: str = ""
    category: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    approximate_annual_tourists: str = ""
    currency: str = ""
    majority_religion: str = ""
    famous_foods: str = ""
    language: str = ""
    best_time_to_visit: str = ""
    cost_of_living: str = ""
    safety: str = ""
    cultural_significance: str = ""
    description: str = ""

    class Config:
        from_attributes = True


class CoordinatesResponse(BaseModel):
    """Schema for destination coordinates"""
    latitude: float
    longitude: float
