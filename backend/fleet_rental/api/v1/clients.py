"""
Router FastAPI per l'entità Client
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce gli endpoint API per la gestione dei clienti.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.client import (
    ClientCreate,
    ClientDetail,
    ClientList,
    ClientRead,
    ClientUpdate,
)
from fleet_rental.services.client_service import client_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/clients",
    tags=["Clienti"],
)


@router.get(
    "/",
    name="clienti_lista",
    summary="Lista clienti",
    description="Recupera la lista paginata dei clienti con eventuale ricerca.",
    response_model=ClientList,
    status_code=status.HTTP_200_OK,
)
async def get_clients(
    search: Optional[str] = Query(None, description="Ricerca su nome, telefono, email e patente"),
    page: int = Query(1, ge=1, description="Numero pagina"),
    per_page: int = Query(50, ge=1, le=200, description="Elementi per pagina"),
    state: AppState = Depends(get_state),
) -> ClientList:
    clients, total = client_service.get_all(
        state, search=search, page=page, per_page=per_page
    )

    return ClientList(
        items=[ClientRead.model_validate(c) for c in clients],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/{client_id}",
    name="cliente_dettaglio",
    summary="Dettaglio cliente",
    description="Anagrafica, livello di fedeltà e storico del cliente.",
    response_model=ClientDetail,
    status_code=status.HTTP_200_OK,
)
async def get_client(
    client_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> ClientDetail:
    return client_service.get_detail(state, client_id)


@router.post(
    "/",
    name="cliente_crea",
    summary="Crea cliente",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    data: ClientCreate,
    state: AppState = Depends(get_state),
) -> ClientRead:
    """
    Crea un nuovo cliente.

    Raises:
        BusinessValidationError: Se campi obbligatori o formati non sono validi
    """
    client = client_service.create(state, data)
    return ClientRead.model_validate(client)


@router.put(
    "/{client_id}",
    name="cliente_aggiorna",
    summary="Aggiorna cliente",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def update_client(
    client_id: uuid.UUID,
    data: ClientUpdate,
    state: AppState = Depends(get_state),
) -> ClientRead:
    client = client_service.update(state, client_id, data)
    return ClientRead.model_validate(client)


@router.delete(
    "/{client_id}",
    name="cliente_elimina",
    summary="Elimina cliente",
    description="Elimina un cliente senza noleggi in corso.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_client(
    client_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    client_service.delete(state, client_id)
