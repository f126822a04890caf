# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Recipient resolution for staff notifications.
"""

from typing import Protocol

from ritepath.models.domain import NotificationPreferences, StaffMember

NOTIFIABLE_ROLES = frozenset({"funeral-director", "removal-team"})


class StaffDirectory(Protocol):
    def list_staff(self) -> list[StaffMember]: ...


class ProfileStore(Protocol):
    def get_notification_preferences(self) -> NotificationPreferences: ...


def is_notifiable(member: StaffMember) -> bool:
    return (
        member.role in NOTIFIABLE_ROLES
        and member.availability != "unavailable"
        and bool(member.phone)
    )


class RecipientResolver:
    """Works out which phone numbers hear about new cases and signed documents."""

    def __init__(self, staff_directory: StaffDirectory, profile_store: ProfileStore) -> None:
        self._staff = staff_directory
        self._profile = profile_store

    def get_notifiable_staff(self) -> list[str]:
        """Eligible staff phones plus the user's own number when opted in.

        De-duplicated in first-seen order, never containing an empty value.
        """
        phones = [m.phone for m in self._staff.list_staff() if is_notifiable(m)]

        prefs = self._profile.get_notification_preferences()
        if prefs.sms_enabled and prefs.phone_number:
            phones.append(prefs.phone_number)

        return [p for p in dict.fromkeys(phones) if p]
