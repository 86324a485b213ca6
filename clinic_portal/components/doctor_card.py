from dataclasses import dataclass
from typing import List, Optional, Union

from ..core.security import UserRole
from ..schemas.doctor import Doctor


@dataclass
class CardAction:
    label: str
    # "delete": confirmed POST to href; "book": link to href; "login": prompt only
    kind: str
    href: Optional[str] = None
    confirm: Optional[str] = None


@dataclass
class DoctorCard:
    doctor_id: Optional[Union[int, str]]
    name: str
    lines: List[str]
    action: CardAction


def build_doctor_card(doctor: Doctor, role: Optional[UserRole]) -> DoctorCard:
    """Summarise a doctor for the dashboards, with the action the role allows."""
    lines = [
        f"Specialty: {doctor.specialty or ''}",
        f"Email: {doctor.email or ''}",
        f"Available: {', '.join(doctor.available_times)}",
    ]

    if role == UserRole.ADMIN:
        action = CardAction(
            "Delete",
            "delete",
            href=f"/admin/doctors/{doctor.id}/delete",
            confirm=f"Are you sure you want to delete Dr. {doctor.name}?",
        )
    elif role == UserRole.LOGGED_PATIENT:
        action = CardAction(
            "Book Appointment",
            "book",
            href=f"/patient/doctors/{doctor.id}/book",
        )
    else:
        action = CardAction("Book Now", "login")

    return DoctorCard(doctor_id=doctor.id, name=doctor.name, lines=lines, action=action)


def build_doctor_cards(doctors: List[Doctor], role: Optional[UserRole]) -> List[DoctorCard]:
    return [build_doctor_card(doctor, role) for doctor in doctors]
