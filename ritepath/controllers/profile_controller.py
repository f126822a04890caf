# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: current user's profile and notification preferences."""
from fastapi import APIRouter, Depends

from ritepath.core.dependencies import get_profile_repo
from ritepath.models.domain import NotificationPreferences, UserProfile
from ritepath.repositories.profile_repository import ProfileRepository
from ritepath.schemas import (
    EmailAddressUpdate,
    NotificationPreferencesUpdate,
    PhoneNumberUpdate,
    ProfileUpdateRequest,
    changed_fields,
)

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])


@router.get("", response_model=UserProfile)
def get_profile(repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.get_profile()


@router.patch("", response_model=UserProfile)
def update_profile(payload: ProfileUpdateRequest,
                   repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.update_profile(changed_fields(payload))


@router.put("/phone-number", response_model=UserProfile)
def update_phone_number(payload: PhoneNumberUpdate,
                        repo: ProfileRepository = Depends(get_profile_repo)):
    """Set the user's number on the profile and in the notification preferences."""
    return repo.update_phone_number(payload.phone_number)


@router.put("/email-address", response_model=UserProfile)
def update_email_address(payload: EmailAddressUpdate,
                         repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.update_email_address(payload.email_address)


@router.patch("/notifications", response_model=NotificationPreferences)
def update_notification_preferences(payload: NotificationPreferencesUpdate,
                                    repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.update_notification_preferences(changed_fields(payload))


@router.post("/notifications/toggle-sms", response_model=NotificationPreferences)
def toggle_sms(repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.toggle_sms_notifications()


@router.post("/notifications/toggle-email", response_model=NotificationPreferences)
def toggle_email(repo: ProfileRepository = Depends(get_profile_repo)):
    return repo.toggle_email_notifications()
