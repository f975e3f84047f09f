"""
Client endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.schemas.client import ClientCreate, ClientUpdate, ClientOut
from shiftpay.services.client_service import (
    create_client,
    list_clients,
    get_client_or_404,
    update_client,
)

router = APIRouter()


@router.post("", response_model=ClientOut, status_code=201)
async def create_client_endpoint(client_data: ClientCreate, db: Session = Depends(get_db)):
    return create_client(db, client_data)


@router.get("", response_model=List[ClientOut])
async def list_clients_endpoint(
    status: Optional[str] = Query(None, description="active or inactive"),
    db: Session = Depends(get_db),
):
    return list_clients(db, status_filter=status)


@router.get("/{client_id}", response_model=ClientOut)
async def get_client_endpoint(client_id: int, db: Session = Depends(get_db)):
    return get_client_or_404(db, client_id)


@router.patch("/{client_id}", response_model=ClientOut)
async def update_client_endpoint(
    client_id: int,
    client_data: ClientUpdate,
    db: Session = Depends(get_db),
):
    return update_client(db, client_id, client_data)
