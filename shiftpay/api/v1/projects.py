"""
Project endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.schemas.client import ProjectCreate, ProjectUpdate, ProjectOut
from shiftpay.services.client_service import (
    create_project,
    list_projects,
    get_project_or_404,
    update_project,
)

router = APIRouter()


@router.post("", response_model=ProjectOut, status_code=201)
async def create_project_endpoint(project_data: ProjectCreate, db: Session = Depends(get_db)):
    """Create a project under an existing client"""
    return create_project(db, project_data)


@router.get("", response_model=List[ProjectOut])
async def list_projects_endpoint(
    client_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return list_projects(db, client_id=client_id, status_filter=status)


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project_endpoint(project_id: int, db: Session = Depends(get_db)):
    return get_project_or_404(db, project_id)


@router.patch("/{project_id}", response_model=ProjectOut)
async def update_project_endpoint(
    project_id: int,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db),
):
    return update_project(db, project_id, project_data)
