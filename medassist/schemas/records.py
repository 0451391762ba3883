"""Wire and domain records shared by the sources, the cache and the demo backend.

Field names are snake_case in Python and camelCase on the wire.
"""
from typing import ClassVar, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Article(WireModel):
    id: str
    title: str
    author: str = ""
    summary: str = ""
    content: str = ""
    image_url: str = ""
    date: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value


class Provider(WireModel):
    id: str
    name: str
    specialty: str = ""
    rating: str = ""
    distance: str = ""
    experience: str = ""
    price: str = ""
    availability: str = ""

    @field_validator("id", "rating", mode="before")
    @classmethod
    def _coerce_str(cls, value):
        return str(value) if isinstance(value, (int, float)) else value


class BookingRequest(WireModel):
    doctor_id: Optional[str] = None
    patient_name: str = ""
    patient_email: str = ""
    appointment_date: str = ""
    appointment_time: str = ""
    reason: str = ""
    # Caller-supplied; forwarded as an idempotency key when present.
    request_id: Optional[str] = None

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("patient_name", "patient_email", "appointment_date", "appointment_time")

    def missing_fields(self) -> List[str]:
        """Return the required fields that are empty or whitespace only."""
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name).strip()]


class BookingConfirmation(WireModel):
    id: str
    status: str
    message: str = ""
