# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.

Attributes are snake_case; every model serialises with the camelCase names
the dashboard expects (``caseNumber``, ``messageSid``...).
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Cases ──

class CaseType(str, Enum):
    AT_NEED = "At-Need"
    PRE_NEED = "Pre-Need"


class Case(CamelModel):
    """A case record as rendered by the detail and list pages."""
    id: str
    case_number: str
    deceased_name: str = ""
    case_type: CaseType = CaseType.AT_NEED
    date_created: str
    photo_url: Optional[str] = None
    service_date: Optional[str] = None
    status: Optional[str] = None


# ── Staff directory ──

StaffRole = Literal["removal-team", "funeral-director", "embalmer", "administrative", "other"]
Availability = Literal["available", "on-call", "unavailable"]
VendorType = Literal[
    "removal-service", "florist", "caterer", "transport", "cemetery", "crematory", "other",
]


class StaffMember(CamelModel):
    id: str
    name: str = Field(..., min_length=1, max_length=255)
    role: StaffRole
    phone: str = ""
    email: str = ""
    availability: Availability = "available"
    certifications: list[str] = Field(default_factory=list)
    notes: Optional[str] = None
    date_added: str
    photo_url: Optional[str] = None


class Vendor(CamelModel):
    id: str
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str = ""
    vendor_type: VendorType
    phone: str = ""
    email: str = ""
    address: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    date_added: str
    logo_url: Optional[str] = None


# ── Profile ──

class NotificationPreferences(CamelModel):
    sms_enabled: bool = True
    email_enabled: bool = True
    phone_number: str = ""
    email_address: str = ""


class UserProfile(CamelModel):
    display_name: str = ""
    phone_number: str = ""
    email_address: str = ""
    title: Optional[str] = ""
    license_number: Optional[str] = ""
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)


# ── Notification requests (tagged on ``type``) ──

class NewCaseNotification(CamelModel):
    type: Literal["new-case"] = "new-case"
    deceased_name: str = Field(..., min_length=1)
    next_of_kin_name: str = Field(..., min_length=1)
    location_of_death: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)


class DocumentSignedNotification(CamelModel):
    type: Literal["document-signed"] = "document-signed"
    signer_name: str = Field(..., min_length=1)
    document_type: str = Field(..., min_length=1)
    deceased_name: str = Field(..., min_length=1)
    case_id: str = Field(..., min_length=1)


NotificationRequest = Annotated[
    Union[NewCaseNotification, DocumentSignedNotification],
    Field(discriminator="type"),
]


# ── Dispatch results ──

class SendResult(CamelModel):
    success: bool
    message_sid: Optional[str] = None
    error: Optional[str] = None


class RecipientResult(SendResult):
    phone: str


class FanOutResult(CamelModel):
    success: bool
    total_sent: int
    total_failed: int
    results: list[RecipientResult] = Field(default_factory=list)
