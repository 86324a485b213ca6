from datetime import date, datetime
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
import enum

from .common import TIME_SLOT_PATTERN

class AppointmentStatus(int, enum.Enum):
    SCHEDULED = 0
    COMPLETED = 1

class Appointment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[Union[int, str]] = None
    doctor_id: Optional[Union[int, str]] = None
    doctor_name: Optional[str] = None
    patient_id: Optional[Union[int, str]] = None
    patient_name: Optional[str] = None
    patient_first_name: Optional[str] = None
    patient_last_name: Optional[str] = None
    patient_email: Optional[str] = None
    patient_phone: Optional[str] = None
    patient_address: Optional[str] = None
    appointment_time: Optional[datetime] = None
    status: int = AppointmentStatus.SCHEDULED

    @property
    def full_patient_name(self) -> str:
        if self.patient_first_name or self.patient_last_name:
            return " ".join(
                part for part in (self.patient_first_name, self.patient_last_name) if part
            )
        return self.patient_name or ""

    @property
    def status_label(self) -> str:
        return "Completed" if self.status == AppointmentStatus.COMPLETED else "Scheduled"

    @property
    def is_upcoming(self) -> bool:
        return (
            self.status == AppointmentStatus.SCHEDULED
            and self.appointment_time is not None
            and self.appointment_time > datetime.now(self.appointment_time.tzinfo)
        )

class AppointmentBooking(BaseModel):
    """Booking form submitted by a logged-in patient."""

    doctor_id: Union[int, str]
    patient_id: Union[int, str]
    appointment_date: date
    time_slot: str = Field(min_length=1)

    @field_validator("doctor_id", "patient_id", mode="before")
    @classmethod
    def check_present(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("missing", "Field required")
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value

    @field_validator("time_slot")
    @classmethod
    def check_time_slot(cls, value: str) -> str:
        value = value.strip()
        if not TIME_SLOT_PATTERN.match(value):
            raise PydanticCustomError(
                "time_slot_format",
                "Time slots must use the HH:MM-HH:MM format",
            )
        return value

    @field_validator("appointment_date")
    @classmethod
    def check_not_past(cls, value: date) -> date:
        if value < date.today():
            raise PydanticCustomError(
                "past_date",
                "Appointments cannot be booked in the past",
            )
        return value

    @property
    def appointment_time(self) -> datetime:
        start = self.time_slot.split("-")[0]
        return datetime.fromisoformat(f"{self.appointment_date.isoformat()}T{start}:00")

    def to_payload(self) -> dict:
        return {
            "doctor": {"id": self.doctor_id},
            "patient": {"id": self.patient_id},
            "appointmentTime": self.appointment_time.isoformat(),
            "status": AppointmentStatus.SCHEDULED.value,
        }
