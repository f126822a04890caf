# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: case list and detail reads."""
from fastapi import APIRouter, Depends, HTTPException

from ritepath.core.dependencies import get_case_repo
from ritepath.models.domain import Case
from ritepath.repositories.case_repository import CaseRepository

router = APIRouter(prefix="/api/v1", tags=["Cases"])


@router.get("/cases", response_model=list[Case])
def list_cases(repo: CaseRepository = Depends(get_case_repo)):
    """All cases, newest first. A failing database yields an empty list."""
    return repo.get_all_cases()


@router.get("/cases/{case_id}", response_model=Case)
def get_case(case_id: str, repo: CaseRepository = Depends(get_case_repo)):
    case = repo.get_case_by_id(case_id)
    if case is None:
        raise HTTPException(status_code=404, detail="Case not found")
    return case
