# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Staff & vendor directory.
In-memory store seeded with the default roster. NO business rules here, pure CRUD.
"""

from typing import Any, Optional, Union

from ritepath.models.domain import StaffMember, Vendor

DEFAULT_STAFF: tuple[dict[str, Any], ...] = (
    {
        "id": "staff-1",
        "name": "John Mitchell",
        "role": "removal-team",
        "phone": "(555) 123-4567",
        "email": "john.mitchell@funeral.com",
        "availability": "available",
        "certifications": ["Licensed Removal Technician", "CPR Certified"],
        "date_added": "2024-01-15",
    },
    {
        "id": "staff-2",
        "name": "Sarah Chen",
        "role": "removal-team",
        "phone": "(555) 234-5678",
        "email": "sarah.chen@funeral.com",
        "availability": "on-call",
        "certifications": ["Licensed Removal Technician"],
        "date_added": "2024-01-20",
    },
    {
        "id": "staff-3",
        "name": "Michael Torres",
        "role": "funeral-director",
        "phone": "(555) 345-6789",
        "email": "michael.torres@funeral.com",
        "availability": "available",
        "certifications": ["Licensed Funeral Director", "Embalmer"],
        "date_added": "2024-01-10",
    },
)

DEFAULT_VENDORS: tuple[dict[str, Any], ...] = (
    {
        "id": "vendor-1",
        "company_name": "Premier Removal Services",
        "contact_person": "David Rodriguez",
        "vendor_type": "removal-service",
        "phone": "(555) 456-7890",
        "email": "contact@premierremoval.com",
        "address": "123 Service Rd, City, ST 12345",
        "date_added": "2024-02-01",
    },
    {
        "id": "vendor-2",
        "company_name": "Eternal Gardens Crematory",
        "contact_person": "Lisa Anderson",
        "vendor_type": "crematory",
        "phone": "(555) 567-8901",
        "email": "info@eternalgardens.com",
        "address": "456 Memorial Ave, City, ST 12345",
        "date_added": "2024-02-15",
    },
)


class StaffRepository:
    """In-memory staff and vendor storage, keyed by id (insertion ordered)."""

    def __init__(self, seed_defaults: bool = True) -> None:
        self._staff: dict[str, StaffMember] = {}
        self._vendors: dict[str, Vendor] = {}
        if seed_defaults:
            self.reset_to_defaults()

    # ── Staff ──

    def list_staff(self) -> list[StaffMember]:
        return list(self._staff.values())

    def get_staff(self, staff_id: str) -> Optional[StaffMember]:
        return self._staff.get(staff_id)

    def add_staff(self, member: StaffMember) -> StaffMember:
        self._staff[member.id] = member
        return member

    def update_staff(self, staff_id: str, updates: dict[str, Any]) -> StaffMember:
        """Raises KeyError if the member does not exist."""
        current = self._staff[staff_id]
        updated = current.model_copy(update={k: v for k, v in updates.items() if k != "id"})
        self._staff[staff_id] = StaffMember.model_validate(updated.model_dump())
        return self._staff[staff_id]

    def delete_staff(self, staff_id: str) -> Optional[StaffMember]:
        return self._staff.pop(staff_id, None)

    # ── Vendors ──

    def list_vendors(self) -> list[Vendor]:
        return list(self._vendors.values())

    def get_vendor(self, vendor_id: str) -> Optional[Vendor]:
        return self._vendors.get(vendor_id)

    def add_vendor(self, vendor: Vendor) -> Vendor:
        self._vendors[vendor.id] = vendor
        return vendor

    def update_vendor(self, vendor_id: str, updates: dict[str, Any]) -> Vendor:
        """Raises KeyError if the vendor does not exist."""
        current = self._vendors[vendor_id]
        updated = current.model_copy(update={k: v for k, v in updates.items() if k != "id"})
        self._vendors[vendor_id] = Vendor.model_validate(updated.model_dump())
        return self._vendors[vendor_id]

    def delete_vendor(self, vendor_id: str) -> Optional[Vendor]:
        return self._vendors.pop(vendor_id, None)

    # ── Helpers ──

    def get_removal_teams(self) -> list[Union[StaffMember, Vendor]]:
        """Removal-team staff followed by removal-service vendors."""
        staff = [s for s in self._staff.values() if s.role == "removal-team"]
        vendors = [v for v in self._vendors.values() if v.vendor_type == "removal-service"]
        return [*staff, *vendors]

    def reset_to_defaults(self) -> None:
        self._staff = {s["id"]: StaffMember(**s) for s in DEFAULT_STAFF}
        self._vendors = {v["id"]: Vendor(**v) for v in DEFAULT_VENDORS}

    def clear(self) -> None:
        self._staff.clear()
        self._vendors.clear()
