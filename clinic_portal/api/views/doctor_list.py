"""
Doctor list loading shared by the admin and patient dashboards.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ...schemas.doctor import Doctor
from ...services.api_client import ApiError
from ...services.doctor_service import DoctorService

logger = logging.getLogger(__name__)


@dataclass
class DoctorFilters:
    name: str = ""
    time: str = ""
    specialty: str = ""

    @property
    def active(self) -> bool:
        return any(value.strip() for value in (self.name, self.time, self.specialty))


async def load_doctors(
    doctor_service: DoctorService,
    filters: DoctorFilters,
) -> Tuple[List[Doctor], Optional[str]]:
    """Return the doctors to show and, if the backend call failed, a message for the user."""
    try:
        if filters.active:
            doctors = await doctor_service.filter_doctors(
                filters.name, filters.time, filters.specialty
            )
        else:
            doctors = await doctor_service.get_doctors()
    except ApiError as e:
        if filters.active:
            logger.error(f"Filter error: {e.message}")
            return [], "Failed to filter doctors. Please try again."
        logger.error(f"Failed to load doctors: {e.message}")
        return [], "Failed to load doctors. Please try again later."

    return doctors, None
