# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Current user's profile and notification preferences.
"""

from typing import Any, Optional

from ritepath.models.domain import NotificationPreferences, UserProfile


class ProfileRepository:
    """In-memory holder for a single user profile."""

    def __init__(self, profile: Optional[UserProfile] = None) -> None:
        self._profile = profile or UserProfile()

    def get_profile(self) -> UserProfile:
        return self._profile

    def get_notification_preferences(self) -> NotificationPreferences:
        return self._profile.notifications

    def update_profile(self, updates: dict[str, Any]) -> UserProfile:
        """Merge profile fields. Contact fields also land in the preferences."""
        updates = dict(updates)
        phone_number = updates.pop("phone_number", None)
        email_address = updates.pop("email_address", None)

        merged = {**self._profile.model_dump(), **updates}
        self._profile = UserProfile.model_validate(merged)
        if phone_number is not None:
            self.update_phone_number(phone_number)
        if email_address is not None:
            self.update_email_address(email_address)
        return self._profile

    def update_phone_number(self, phone_number: str) -> UserProfile:
        prefs = self._profile.notifications.model_copy(update={"phone_number": phone_number})
        self._profile = self._profile.model_copy(
            update={"phone_number": phone_number, "notifications": prefs}
        )
        return self._profile

    def update_email_address(self, email_address: str) -> UserProfile:
        prefs = self._profile.notifications.model_copy(update={"email_address": email_address})
        self._profile = self._profile.model_copy(
            update={"email_address": email_address, "notifications": prefs}
        )
        return self._profile

    def update_notification_preferences(self, updates: dict[str, Any]) -> NotificationPreferences:
        merged = {**self._profile.notifications.model_dump(), **updates}
        prefs = NotificationPreferences.model_validate(merged)
        self._profile = self._profile.model_copy(update={"notifications": prefs})
        return prefs

    def toggle_sms_notifications(self) -> NotificationPreferences:
        return self.update_notification_preferences(
            {"sms_enabled": not self._profile.notifications.sms_enabled}
        )

    def toggle_email_notifications(self) -> NotificationPreferences:
        return self.update_notification_preferences(
            {"email_enabled": not self._profile.notifications.email_enabled}
        )
