# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Staff and vendor directory endpoints.
Thin HTTP layer; delegates storage to StaffRepository.
"""
import uuid
from datetime import date
from typing import Union

from fastapi import APIRouter, Depends, HTTPException

from ritepath.core.dependencies import get_staff_repo
from ritepath.models.domain import StaffMember, Vendor
from ritepath.repositories.staff_repository import StaffRepository
from ritepath.schemas import (
    StaffCreateRequest,
    StaffUpdateRequest,
    VendorCreateRequest,
    VendorUpdateRequest,
    changed_fields,
)

router = APIRouter(prefix="/api/v1", tags=["Staff & Vendors"])


# ── Staff ──

@router.get("/staff", response_model=list[StaffMember])
def list_staff(repo: StaffRepository = Depends(get_staff_repo)):
    return repo.list_staff()


@router.post("/staff", response_model=StaffMember, status_code=201)
def add_staff(payload: StaffCreateRequest, repo: StaffRepository = Depends(get_staff_repo)):
    member = StaffMember(
        id=f"staff-{uuid.uuid4().hex[:12]}",
        date_added=date.today().isoformat(),
        **payload.model_dump(),
    )
    return repo.add_staff(member)


@router.post("/staff/reset", response_model=list[StaffMember])
def reset_directory(repo: StaffRepository = Depends(get_staff_repo)):
    """Restore the default staff roster and vendor list."""
    repo.reset_to_defaults()
    return repo.list_staff()


@router.get("/staff/{staff_id}", response_model=StaffMember)
def get_staff(staff_id: str, repo: StaffRepository = Depends(get_staff_repo)):
    member = repo.get_staff(staff_id)
    if member is None:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member


@router.patch("/staff/{staff_id}", response_model=StaffMember)
def update_staff(staff_id: str, payload: StaffUpdateRequest,
                 repo: StaffRepository = Depends(get_staff_repo)):
    try:
        return repo.update_staff(staff_id, changed_fields(payload))
    except KeyError:
        raise HTTPException(status_code=404, detail="Staff member not found")


@router.delete("/staff/{staff_id}")
def delete_staff(staff_id: str, repo: StaffRepository = Depends(get_staff_repo)):
    if repo.delete_staff(staff_id) is None:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return {"status": "deleted", "id": staff_id}


# ── Vendors ──

@router.get("/vendors", response_model=list[Vendor])
def list_vendors(repo: StaffRepository = Depends(get_staff_repo)):
    return repo.list_vendors()


@router.post("/vendors", response_model=Vendor, status_code=201)
def add_vendor(payload: VendorCreateRequest, repo: StaffRepository = Depends(get_staff_repo)):
    vendor = Vendor(
        id=f"vendor-{uuid.uuid4().hex[:12]}",
        date_added=date.today().isoformat(),
        **payload.model_dump(),
    )
    return repo.add_vendor(vendor)


@router.get("/vendors/{vendor_id}", response_model=Vendor)
def get_vendor(vendor_id: str, repo: StaffRepository = Depends(get_staff_repo)):
    vendor = repo.get_vendor(vendor_id)
    if vendor is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


@router.patch("/vendors/{vendor_id}", response_model=Vendor)
def update_vendor(vendor_id: str, payload: VendorUpdateRequest,
                  repo: StaffRepository = Depends(get_staff_repo)):
    try:
        return repo.update_vendor(vendor_id, changed_fields(payload))
    except KeyError:
        raise HTTPException(status_code=404, detail="Vendor not found")


@router.delete("/vendors/{vendor_id}")
def delete_vendor(vendor_id: str, repo: StaffRepository = Depends(get_staff_repo)):
    if repo.delete_vendor(vendor_id) is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return {"status": "deleted", "id": vendor_id}


@router.get("/removal-teams", response_model=list[Union[StaffMember, Vendor]])
def list_removal_teams(repo: StaffRepository = Depends(get_staff_repo)):
    """Removal-team staff and removal-service vendors."""
    return repo.get_removal_teams()
