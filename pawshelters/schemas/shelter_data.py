"""
Shelter data models and schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShelterType(str, Enum):
    """Kinds of organizations listed in the shelter directory."""
    ANIMAL_SHELTER = "animal_shelter"
    VET_CLINIC = "vet_clinic"
    VOLUNTEER_INITIATIVE = "volunteer_initiative"


SHELTER_TYPE_LABELS = {
    ShelterType.ANIMAL_SHELTER.value: "Animal shelter",
    ShelterType.VET_CLINIC.value: "Veterinary clinic",
    ShelterType.VOLUNTEER_INITIATIVE.value: "Volunteer initiative",
}


class FilterOption(BaseModel):
    """A single choice offered by the filter form."""

    value: str
    label: str


SHELTER_TYPE_OPTIONS: List[FilterOption] = [
    FilterOption(value=value, label=label)
    for value, label in SHELTER_TYPE_LABELS.items()
]

RATING_OPTIONS: List[FilterOption] = [
    FilterOption(value=str(stars), label=f"{stars}+ stars" if stars > 1 else "1+ star")
    for stars in range(1, 6)
]


class ShelterProfile(BaseModel):
    """Account record that identifies an entity as a shelter."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Profile identifier")
    full_name: Optional[str] = Field(default=None, description="Account display name")
    address: Optional[str] = Field(default=None, description="Postal address")
    user_type: str = Field(default="shelter", description="Account type")
    created_at: Optional[datetime] = Field(default=None)

    # Contact information
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = Field(default=None)


class ShelterDetail(BaseModel):
    """Supplementary shelter metadata, zero or one per profile."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    profile_id: Optional[str] = Field(default=None, description="Owning profile ID")
    shelter_name: Optional[str] = Field(default=None)
    shelter_type: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default="")
    website: Optional[str] = Field(default="")
    rating: Optional[float] = Field(default=None, description="Average rating, None when unrated")


class EnrichedShelter(ShelterProfile):
    """Profile merged with its detail record and derived counts."""

    shelter_details: ShelterDetail = Field(..., description="Detail record or synthesized default")
    animals_count: int = Field(default=0, ge=0, description="Animals not yet adopted")


class FilterCriteria(BaseModel):
    """Values selected in the filter form. Empty strings mean 'any'."""

    shelter_type: str = Field(default="")
    rating: str = Field(default="", description="Minimum rating")
    free_places: str = Field(default="", description="Collected by the form, not applied")
    location: str = Field(default="")

    @field_validator("rating")
    @classmethod
    def rating_must_be_numeric(cls, v: str) -> str:
        v = v.strip()
        if v:
            try:
                float(v)
            except ValueError:
                raise ValueError("rating must be a number")
        return v

    def minimum_rating(self) -> Optional[float]:
        """Return the active rating threshold, or None when not filtering by rating."""
        return float(self.rating) if self.rating else None


class ShelterCard(BaseModel):
    """Simplified shelter profile for display."""

    id: str
    shelter_name: str
    shelter_type: str
    shelter_type_label: str
    location: str
    description: str = ""
    website: Optional[str] = None
    rating: Optional[float] = None
    animals_count: int = 0
    avatar_url: Optional[str] = None


# View state of the shelter list

class Idle(BaseModel):
    status: Literal["idle"] = "idle"


class Loading(BaseModel):
    status: Literal["loading"] = "loading"


class Ready(BaseModel):
    status: Literal["ready"] = "ready"
    shelters: List[EnrichedShelter] = Field(default_factory=list)


class Errored(BaseModel):
    status: Literal["errored"] = "errored"
    message: str


ListState = Annotated[Union[Idle, Loading, Ready, Errored], Field(discriminator="status")]
