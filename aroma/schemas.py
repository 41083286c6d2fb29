"""
Pydantic Schemas for Request/Response Validation

Menu documents keep their per-locale field names (`name_en`, `title_ar`...)
on the wire. Every other entity is exposed in camelCase (`customerName`,
`isActive`), which is also how it is stored.
"""

import re
import datetime as dt
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar, Union
from urllib.parse import urlparse

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from aroma.i18n import LocalizedList, LocalizedText

T = TypeVar("T")

EMAIL_PATTERN = re.compile(r"^[\w\.+-]+@[\w\.-]+\.\w+$")
PHONE_PATTERN = re.compile(r"^\+\d{1,4} \d{5} \d{5}$")
MAX_CUSTOM_GUESTS = 200
DEFAULT_CUSTOMER_IMAGE = "/testimonial-avatar.jpg"


def _validate_email(v: str) -> str:
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire and in MongoDB."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# ENUMS
# =============================================================================

class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ImageCategory(str, Enum):
    HERO = "hero"
    GALLERY = "gallery"
    LOGO = "logo"
    BACKGROUND = "background"
    SEPARATOR = "separator"
    MENU = "menu"
    ABOUT = "about"
    TESTIMONIAL = "testimonial"


# =============================================================================
# SHARED
# =============================================================================

class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for paginated list endpoints."""
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    errors: Optional[List[dict[str, str]]] = None
    detail: Optional[Any] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    email_service: str
    storage_service: str
    timestamp: datetime


# =============================================================================
# MENU SECTIONS
# =============================================================================

class MenuItemIn(BaseModel):
    """Single dish. `id` is kept on update when it is a real ObjectId."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None
    name_en: str = Field(..., min_length=1, examples=["Hummus"])
    name_ar: str = Field(..., min_length=1, examples=["حمص"])
    name_ru: str = Field(..., min_length=1, examples=["Хумус"])
    description_en: str = Field(..., min_length=1)
    description_ar: str = Field(..., min_length=1)
    description_ru: str = Field(..., min_length=1)
    price: str = Field(..., min_length=1, examples=["8.99"])
    image: Optional[str] = None


class SubsectionIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = None
    section_en: str = Field(default="", examples=["Cold"])
    section_ar: str = ""
    section_ru: str = ""
    items: List[MenuItemIn] = Field(default_factory=list)


class MenuSectionIn(BaseModel):
    """Request schema for creating or replacing a menu section."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title_en: str = Field(..., min_length=1, examples=["Appetizers"])
    title_ar: str = Field(..., min_length=1)
    title_ru: str = Field(..., min_length=1)
    subsections: List[SubsectionIn] = Field(default_factory=list)


class MenuItemOut(BaseModel):
    id: str
    name_en: str = ""
    name_ar: str = ""
    name_ru: str = ""
    description_en: str = ""
    description_ar: str = ""
    description_ru: str = ""
    price: str = ""
    image: Optional[str] = None


class SubsectionOut(BaseModel):
    id: Optional[str] = None
    section_en: str = ""
    section_ar: str = ""
    section_ru: str = ""
    items: List[MenuItemOut] = Field(default_factory=list)


class MenuSectionOut(BaseModel):
    id: str
    title_en: str = ""
    title_ar: str = ""
    title_ru: str = ""
    subsections: List[SubsectionOut] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class FlattenedMenuItem(MenuItemOut):
    """A menu item with its parent subsection and section titles attached."""
    section: str = ""
    title: str = ""


# =============================================================================
# TESTIMONIALS
# =============================================================================

class TestimonialCreate(CamelModel):
    customer_name: str = Field(..., min_length=1, examples=["Jane Bennett"])
    message: str = Field(..., min_length=1)
    customer_image: str = Field(default=DEFAULT_CUSTOMER_IMAGE)
    is_active: bool = True


class TestimonialUpdate(CamelModel):
    customer_name: Optional[str] = Field(None, min_length=1)
    message: Optional[str] = Field(None, min_length=1)
    customer_image: Optional[str] = None
    is_active: Optional[bool] = None


class TestimonialOut(CamelModel):
    id: str
    customer_name: str
    message: str
    customer_image: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TestimonialListResponse(BaseModel):
    testimonials: List[TestimonialOut]
    total: int
    page: int
    totalPages: int


class ActiveTestimonial(CamelModel):
    id: str
    customer_name: str
    message: str
    customer_image: Optional[str] = None


class ActiveTestimonialsResponse(BaseModel):
    testimonials: List[ActiveTestimonial]


# =============================================================================
# RESTAURANT STORY / MENU CARD COPY
# =============================================================================

class RestaurantStoryCreate(CamelModel):
    tagline: LocalizedText
    description: LocalizedText
    author: LocalizedText
    is_active: bool = True


class RestaurantStoryUpdate(CamelModel):
    id: str = Field(..., min_length=1, validation_alias=AliasChoices("id", "_id"))
    tagline: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    author: Optional[LocalizedText] = None
    is_active: Optional[bool] = None


class RestaurantStoryOut(CamelModel):
    id: str
    tagline: LocalizedText
    description: LocalizedText
    author: LocalizedText
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuCardCopyCreate(CamelModel):
    paragraphs: LocalizedList


class MenuCardCopyUpdate(CamelModel):
    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    paragraphs: LocalizedList


class MenuCardCopyOut(CamelModel):
    id: str
    paragraphs: LocalizedList
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# STATIC IMAGES
# =============================================================================

class StaticImageCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["Menu-page Hero"])
    description: Optional[str] = None
    category: ImageCategory
    image_url: str = Field(..., min_length=1)
    storage_public_id: Optional[str] = None
    alt_text: str = Field(..., min_length=1)
    is_active: bool = True


class StaticImageUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[ImageCategory] = None
    image_url: Optional[str] = Field(None, min_length=1)
    storage_public_id: Optional[str] = None
    alt_text: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class StaticImageOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: ImageCategory
    image_url: str
    storage_public_id: Optional[str] = None
    alt_text: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadResponse(CamelModel):
    public_id: str
    url: str


# =============================================================================
# SETTINGS
# =============================================================================

class GettingHere(CamelModel):
    steps: List[str] = Field(default_factory=list)
    map_embed_src: str

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, v: List[str]) -> List[str]:
        if any(not step for step in v):
            raise ValueError("Step is required")
        return v

    @field_validator("map_embed_src")
    @classmethod
    def validate_map_embed_src(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Must be a valid URL")
        return v


class Location(CamelModel):
    address: List[str] = Field(default_factory=list)
    getting_here: GettingHere
    phone_numbers: List[str] = Field(default_factory=list)
    emails: List[str] = Field(default_factory=list)
    opening_hours: str = Field(..., min_length=1)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: List[str]) -> List[str]:
        if any(not line for line in v):
            raise ValueError("Address line is required")
        return v

    @field_validator("phone_numbers")
    @classmethod
    def validate_phone_numbers(cls, v: List[str]) -> List[str]:
        for number in v:
            if not PHONE_PATTERN.match(number):
                raise ValueError("Phone number must be in format +CC 12345 67890")
        return v

    @field_validator("emails")
    @classmethod
    def validate_emails(cls, v: List[str]) -> List[str]:
        return [_validate_email(e) for e in v]


class SettingsIn(CamelModel):
    locations: List[Location] = Field(..., min_length=1)


class SettingsOut(CamelModel):
    id: str
    locations: List[Location] = Field(default_factory=list)


# =============================================================================
# RESERVATIONS
# =============================================================================

class ReservationCreate(CamelModel):
    """Public reservation form."""
    name: str = Field(..., min_length=2, max_length=100, examples=["John Doe"])
    email: str = Field(..., examples=["john@example.com"])
    phone: str = Field(..., min_length=10, max_length=20, examples=["+971 50123 45678"])
    date: dt.date
    time: str = Field(..., min_length=1, examples=["19:30"])
    guests: Union[int, str] = Field(..., examples=["2", "other"])
    custom_guests: Optional[str] = None
    occasion: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    special_requests: Optional[str] = None
    table_preference: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: dt.date) -> dt.date:
        if v < datetime.now(timezone.utc).date():
            raise ValueError("Please select a future date")
        return v

    @model_validator(mode="after")
    def validate_guests(self) -> "ReservationCreate":
        if str(self.guests) == "other":
            custom = (self.custom_guests or "").strip()
            if not custom.isdigit() or not 0 < int(custom) <= MAX_CUSTOM_GUESTS:
                raise ValueError(
                    f"Please enter a valid number of guests (1-{MAX_CUSTOM_GUESTS})"
                )
        elif not str(self.guests).strip().isdigit() or int(self.guests) < 1:
            raise ValueError("Number of guests is required")
        return self

    @property
    def guest_count(self) -> int:
        if str(self.guests) == "other":
            return int(self.custom_guests)
        return int(self.guests)


class ReservationUpdate(CamelModel):
    """Admin update; usually only the status."""
    status: Optional[ReservationStatus] = None
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=20)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, min_length=1)
    guests: Optional[int] = Field(None, ge=1)
    occasion: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    special_requests: Optional[str] = None
    table_preference: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _validate_email(v)


class ReservationOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    date: datetime
    time: str
    guests: int
    occasion: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    special_requests: Optional[str] = None
    table_preference: Optional[str] = None
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: Optional[datetime] = None


# =============================================================================
# AUTH
# =============================================================================

class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v.strip())


class SessionResponse(CamelModel):
    token: str
    email: str
    role: str
    expires_at: datetime


class IdentityResponse(BaseModel):
    email: str
    role: str
