"""Healthcare provider record from the provider directory."""

from pydantic import BaseModel, Field
from typing import List


class Provider(BaseModel):
    """A bookable doctor."""

    id: str
    name: str
    specialty: str
    rating: float = Field(..., ge=0.0, le=5.0)
    distance: str
    address: str
    phone: str
    available_slots: List[str] = Field(default_factory=list)
