# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package."""
from ritepath.repositories.case_repository import CaseRepository
from ritepath.repositories.profile_repository import ProfileRepository
from ritepath.repositories.staff_repository import StaffRepository

__all__ = ["CaseRepository", "ProfileRepository", "StaffRepository"]
