from pydantic import BaseModel, ValidationError
import re

_CLOCK_TIME = r"(?:[01]\d|2[0-3]):[0-5]\d"

TIME_SLOT_PATTERN = re.compile(rf"^{_CLOCK_TIME}-{_CLOCK_TIME}$")

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields"

# Error types pydantic reports for absent or blank input
_MISSING_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


class ActionResult(BaseModel):
    """Outcome of a write call against the clinic backend."""
    success: bool
    message: str


def describe_validation_error(exc: ValidationError) -> str:
    """Turn the first form validation error into a notification message."""
    errors = exc.errors()
    if not errors:
        return REQUIRED_FIELDS_MESSAGE

    error = errors[0]
    if error["type"] in _MISSING_ERROR_TYPES or error.get("input") == "":
        return REQUIRED_FIELDS_MESSAGE
    if "email" in error["loc"]:
        return "Please enter a valid email address"
    return error["msg"]
