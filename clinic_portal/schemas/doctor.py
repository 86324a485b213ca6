from typing import List, Optional, Union
from pydantic import (
    AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..core.config import settings
from .common import TIME_SLOT_PATTERN


class Doctor(BaseModel):
    """Doctor record as returned by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    # The backend has used several spellings for these keys
    id: Optional[Union[int, str]] = Field(
        default=None, validation_alias=AliasChoices("id", "_id")
    )
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("specialty", "specialization", "speciality"),
    )
    available_times: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("availableTimes", "availability"),
    )
    rating: Optional[float] = None
    years_of_experience: Optional[int] = Field(
        default=None, validation_alias="yearsOfExperience"
    )
    clinic_address: Optional[str] = Field(
        default=None, validation_alias="clinicAddress"
    )

    @field_validator("available_times", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return [] if value is None else value


class DoctorCreate(BaseModel):
    """Add-doctor form, sent to the backend in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    password: str = Field(min_length=1)
    specialty: str = Field(min_length=1)
    available_times: List[str] = Field(min_length=1)
    years_of_experience: int = 0
    clinic_address: str = ""
    rating: float = 0

    @field_validator("available_times", mode="before")
    @classmethod
    def drop_blank_slots(cls, value):
        if isinstance(value, str):
            value = [value]
        return [slot.strip() for slot in value or [] if slot and slot.strip()]

    @field_validator("available_times")
    @classmethod
    def check_time_slots(cls, value: List[str]) -> List[str]:
        if len(value) > settings.MAX_TIME_SLOTS:
            raise PydanticCustomError(
                "too_many_time_slots",
                "Maximum {limit} time slots allowed",
                {"limit": settings.MAX_TIME_SLOTS},
            )
        for slot in value:
            if not TIME_SLOT_PATTERN.match(slot):
                raise PydanticCustomError(
                    "time_slot_format",
                    "Time slots must use the HH:MM-HH:MM format",
                )
        return value

    @field_validator("years_of_experience", "rating", mode="before")
    @classmethod
    def empty_to_zero(cls, value):
        return 0 if value in (None, "") else value

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
