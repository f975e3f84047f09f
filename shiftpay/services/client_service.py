"""
Client and project service
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shiftpay.models.client import Client, Project
from shiftpay.schemas.client import ClientCreate, ClientUpdate, ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def create_client(db: Session, client_data: ClientCreate) -> Client:
    client = Client(**client_data.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Created client id=%s", client.id)
    return client


def list_clients(db: Session, status_filter: Optional[str] = None) -> List[Client]:
    query = db.query(Client)
    if status_filter:
        query = query.filter(Client.status == status_filter)
    return query.order_by(Client.name.asc()).all()


def get_client_or_404(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client with id {client_id} not found",
        )
    return client


def update_client(db: Session, client_id: int, client_data: ClientUpdate) -> Client:
    client = get_client_or_404(db, client_id)
    for field, value in client_data.model_dump(exclude_unset=True).items():
        if field in ("name", "status") and value is None:
            continue
        setattr(client, field, value)
    db.commit()
    db.refresh(client)
    logger.info("Updated client id=%s", client.id)
    return client


def create_project(db: Session, project_data: ProjectCreate) -> Project:
    """
    Create a project under an existing client

    Raises:
        HTTPException: If the client does not exist
    """
    get_client_or_404(db, project_data.client_id)
    project = Project(**project_data.model_dump())
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Created project id=%s client_id=%s", project.id, project.client_id)
    return project


def list_projects(
    db: Session,
    client_id: Optional[int] = None,
    status_filter: Optional[str] = None,
) -> List[Project]:
    query = db.query(Project)
    if client_id is not None:
        query = query.filter(Project.client_id == client_id)
    if status_filter:
        query = query.filter(Project.status == status_filter)
    return query.order_by(Project.name.asc()).all()


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project with id {project_id} not found",
        )
    return project


def update_project(db: Session, project_id: int, project_data: ProjectUpdate) -> Project:
    project = get_project_or_404(db, project_id)
    update_dict = project_data.model_dump(exclude_unset=True)
    if update_dict.get("client_id") is not None:
        get_client_or_404(db, update_dict["client_id"])
    for field, value in update_dict.items():
        if value is not None:
            setattr(project, field, value)
    db.commit()
    db.refresh(project)
    logger.info("Updated project id=%s", project.id)
    return project


def resolve_client_project(db: Session, client_id: int, project_id: int):
    """
    Load a client/project pair and check that the project belongs to the client.

    Raises:
        HTTPException: 400 if either is missing or they do not belong together
    """
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Client with id {client_id} does not exist",
        )
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Project with id {project_id} does not exist",
        )
    if project.client_id != client.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Project {project_id} does not belong to client {client_id}",
        )
    return client, project
