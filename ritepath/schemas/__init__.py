# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas: API contract definitions.
Used ONLY at the controller (HTTP) boundary. Field names are camelCase on the
wire, snake_case in Python.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field, TypeAdapter

from ritepath.models.domain import (
    Availability,
    CamelModel,
    NotificationRequest,
    StaffRole,
    VendorType,
)

notification_request_adapter = TypeAdapter(NotificationRequest)


# ── Notifications ──

class SignatureSmsRequest(CamelModel):
    to: str = Field(..., min_length=1)
    signer_name: str = Field(..., min_length=1)
    deceased_name: str = Field(..., min_length=1)
    signature_url: str = Field(..., min_length=1)


class UrgentNotifyRequest(CamelModel):
    staff_phone: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=1500)


class BroadcastRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=1500)
    phones: Optional[List[str]] = None


class SmsSentResponse(CamelModel):
    success: bool = True
    message_sid: Optional[str] = None


class RecipientsResponse(CamelModel):
    phones: List[str]


class ErrorResponse(CamelModel):
    error: str
    details: Optional[Any] = None


# ── Staff directory ──

class StaffCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: StaffRole
    phone: str = Field(default="", max_length=50)
    email: str = Field(default="", max_length=255)
    availability: Availability = "available"
    certifications: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=5000)
    photo_url: Optional[str] = None


class StaffUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[StaffRole] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    availability: Optional[Availability] = None
    certifications: Optional[List[str]] = None
    notes: Optional[str] = Field(default=None, max_length=5000)
    photo_url: Optional[str] = None


class VendorCreateRequest(CamelModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str = Field(default="", max_length=255)
    vendor_type: VendorType
    phone: str = Field(default="", max_length=50)
    email: str = Field(default="", max_length=255)
    address: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=5000)
    logo_url: Optional[str] = None


class VendorUpdateRequest(CamelModel):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    contact_person: Optional[str] = Field(default=None, max_length=255)
    vendor_type: Optional[VendorType] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=5000)
    logo_url: Optional[str] = None


# ── Profile ──

class ProfileUpdateRequest(CamelModel):
    display_name: Optional[str] = Field(default=None, max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=50)
    email_address: Optional[str] = Field(default=None, max_length=255)
    title: Optional[str] = Field(default=None, max_length=255)
    license_number: Optional[str] = Field(default=None, max_length=100)


class PhoneNumberUpdate(CamelModel):
    phone_number: str = Field(..., max_length=50)


class EmailAddressUpdate(CamelModel):
    email_address: str = Field(..., max_length=255)


class NotificationPreferencesUpdate(CamelModel):
    sms_enabled: Optional[bool] = None
    email_enabled: Optional[bool] = None
    phone_number: Optional[str] = Field(default=None, max_length=50)
    email_address: Optional[str] = Field(default=None, max_length=255)


def changed_fields(model: CamelModel) -> Dict[str, Any]:
    """Only the fields the client actually sent, snake_case keyed.

    An explicit ``null`` means "leave unchanged".
    """
    return model.model_dump(exclude_unset=True, exclude_none=True)
