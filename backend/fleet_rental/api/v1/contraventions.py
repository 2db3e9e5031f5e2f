"""
Router FastAPI per le Contravvenzioni
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.contravention import (
    ContraventionCreate,
    ContraventionRead,
    ContraventionStatus,
    ContraventionStatusUpdate,
)
from fleet_rental.services.contravention_service import contravention_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/contraventions",
    tags=["Contravvenzioni"],
)


@router.get(
    "/",
    name="contravvenzioni_lista",
    summary="Lista contravvenzioni",
    response_model=list[ContraventionRead],
    status_code=status.HTTP_200_OK,
)
async def get_contraventions(
    vehicle_id: Optional[uuid.UUID] = Query(None, description="UUID del veicolo"),
    rental_id: Optional[uuid.UUID] = Query(None, description="UUID del noleggio"),
    status_filter: Optional[ContraventionStatus] = Query(None, alias="status", description="Filtro per stato"),
    state: AppState = Depends(get_state),
) -> list[ContraventionRead]:
    items = contravention_service.get_all(
        state, vehicle_id=vehicle_id, rental_id=rental_id, status=status_filter
    )
    return [ContraventionRead.model_validate(c) for c in items]


@router.get(
    "/{contravention_id}",
    name="contravvenzione_dettaglio",
    summary="Dettaglio contravvenzione",
    response_model=ContraventionRead,
    status_code=status.HTTP_200_OK,
)
async def get_contravention(
    contravention_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> ContraventionRead:
    return ContraventionRead.model_validate(
        contravention_service.get_by_id(state, contravention_id)
    )


@router.post(
    "/",
    name="contravvenzione_crea",
    summary="Registra contravvenzione",
    response_model=ContraventionRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_contravention(
    data: ContraventionCreate,
    state: AppState = Depends(get_state),
) -> ContraventionRead:
    """
    Registra una contravvenzione su un veicolo (ed eventualmente un noleggio).

    Raises:
        NotFoundError: Se veicolo o noleggio non esistono
        BusinessValidationError: Se l'importo non è positivo
    """
    return ContraventionRead.model_validate(contravention_service.create(state, data))


@router.patch(
    "/{contravention_id}/status",
    name="contravvenzione_stato",
    summary="Cambia stato contravvenzione",
    response_model=ContraventionRead,
    status_code=status.HTTP_200_OK,
)
async def update_contravention_status(
    contravention_id: uuid.UUID,
    data: ContraventionStatusUpdate,
    state: AppState = Depends(get_state),
) -> ContraventionRead:
    contravention = contravention_service.update_status(state, contravention_id, data.status)
    return ContraventionRead.model_validate(contravention)


@router.delete(
    "/{contravention_id}",
    name="contravvenzione_elimina",
    summary="Elimina contravvenzione",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_contravention(
    contravention_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    contravention_service.delete(state, contravention_id)
