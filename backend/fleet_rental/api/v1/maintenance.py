"""
Router FastAPI per Manutenzioni e Sinistri
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.maintenance import (
    AccidentCreate,
    AccidentRead,
    AccidentStatus,
    AccidentStatusUpdate,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceStatus,
    MaintenanceStatusUpdate,
)
from fleet_rental.services.maintenance_service import accident_service, maintenance_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router manutenzioni
router = APIRouter(
    prefix="/maintenance",
    tags=["Manutenzioni"],
)

# Router sinistri
accidents_router = APIRouter(
    prefix="/accidents",
    tags=["Sinistri"],
)


# -------------------------------------------------------------------
# Manutenzioni
# -------------------------------------------------------------------

@router.get(
    "/",
    name="manutenzioni_lista",
    summary="Lista manutenzioni",
    response_model=list[MaintenanceRead],
    status_code=status.HTTP_200_OK,
)
async def get_maintenance_records(
    vehicle_id: Optional[uuid.UUID] = Query(None, description="UUID del veicolo"),
    status_filter: Optional[MaintenanceStatus] = Query(None, alias="status", description="Filtro per stato"),
    state: AppState = Depends(get_state),
) -> list[MaintenanceRead]:
    records = maintenance_service.get_all(state, vehicle_id=vehicle_id, status=status_filter)
    return [MaintenanceRead.model_validate(m) for m in records]


@router.get(
    "/{record_id}",
    name="manutenzione_dettaglio",
    summary="Dettaglio manutenzione",
    response_model=MaintenanceRead,
    status_code=status.HTTP_200_OK,
)
async def get_maintenance_record(
    record_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> MaintenanceRead:
    return MaintenanceRead.model_validate(maintenance_service.get_by_id(state, record_id))


@router.post(
    "/",
    name="manutenzione_crea",
    summary="Registra manutenzione",
    response_model=MaintenanceRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_maintenance_record(
    data: MaintenanceCreate,
    state: AppState = Depends(get_state),
) -> MaintenanceRead:
    """
    Registra un intervento di manutenzione.

    Raises:
        NotFoundError: Se il veicolo non esiste
        BusinessValidationError: Se descrizione o costo non sono validi
    """
    return MaintenanceRead.model_validate(maintenance_service.create(state, data))


@router.patch(
    "/{record_id}/status",
    name="manutenzione_stato",
    summary="Cambia stato manutenzione",
    response_model=MaintenanceRead,
    status_code=status.HTTP_200_OK,
)
async def update_maintenance_status(
    record_id: uuid.UUID,
    data: MaintenanceStatusUpdate,
    state: AppState = Depends(get_state),
) -> MaintenanceRead:
    record = maintenance_service.update_status(state, record_id, data.status)
    return MaintenanceRead.model_validate(record)


@router.delete(
    "/{record_id}",
    name="manutenzione_elimina",
    summary="Elimina manutenzione",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_maintenance_record(
    record_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    maintenance_service.delete(state, record_id)


# -------------------------------------------------------------------
# Sinistri
# -------------------------------------------------------------------

@accidents_router.get(
    "/",
    name="sinistri_lista",
    summary="Lista sinistri",
    response_model=list[AccidentRead],
    status_code=status.HTTP_200_OK,
)
async def get_accidents(
    vehicle_id: Optional[uuid.UUID] = Query(None, description="UUID del veicolo"),
    status_filter: Optional[AccidentStatus] = Query(None, alias="status", description="Filtro per stato"),
    state: AppState = Depends(get_state),
) -> list[AccidentRead]:
    accidents = accident_service.get_all(state, vehicle_id=vehicle_id, status=status_filter)
    return [AccidentRead.model_validate(a) for a in accidents]


@accidents_router.get(
    "/{accident_id}",
    name="sinistro_dettaglio",
    summary="Dettaglio sinistro",
    response_model=AccidentRead,
    status_code=status.HTTP_200_OK,
)
async def get_accident(
    accident_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> AccidentRead:
    return AccidentRead.model_validate(accident_service.get_by_id(state, accident_id))


@accidents_router.post(
    "/",
    name="sinistro_crea",
    summary="Dichiara sinistro",
    description="Apre una pratica di sinistro in stato 'pending'.",
    response_model=AccidentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_accident(
    data: AccidentCreate,
    state: AppState = Depends(get_state),
) -> AccidentRead:
    return AccidentRead.model_validate(accident_service.create(state, data))


@accidents_router.patch(
    "/{accident_id}/status",
    name="sinistro_stato",
    summary="Cambia stato sinistro",
    description="Aggiorna lo stato della pratica e, se indicato, il costo finale.",
    response_model=AccidentRead,
    status_code=status.HTTP_200_OK,
)
async def update_accident_status(
    accident_id: uuid.UUID,
    data: AccidentStatusUpdate,
    state: AppState = Depends(get_state),
) -> AccidentRead:
    accident = accident_service.update_status(
        state, accident_id, data.status, final_cost=data.final_cost
    )
    return AccidentRead.model_validate(accident)


@accidents_router.delete(
    "/{accident_id}",
    name="sinistro_elimina",
    summary="Elimina sinistro",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_accident(
    accident_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    accident_service.delete(state, accident_id)
