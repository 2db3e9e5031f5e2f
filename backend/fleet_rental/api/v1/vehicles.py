"""
Router FastAPI per l'entità Vehicle
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce gli endpoint API per la gestione dei veicoli.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.accounting import VehicleFinancials
from fleet_rental.schemas.vehicle import (
    VehicleCreate,
    VehicleList,
    VehicleRead,
    VehicleStatus,
    VehicleStatusUpdate,
    VehicleUpdate,
)
from fleet_rental.services.fleet_report_service import fleet_report_service
from fleet_rental.services.vehicle_service import vehicle_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/vehicles",
    tags=["Veicoli"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="veicoli_lista",
    summary="Lista veicoli",
    description="Recupera la lista paginata dei veicoli con filtri per stato, proprietario, anno e ricerca.",
    response_model=VehicleList,
    status_code=status.HTTP_200_OK,
)
async def get_vehicles(
    status_filter: Optional[VehicleStatus] = Query(None, alias="status", description="Filtro per stato"),
    owner_id: Optional[uuid.UUID] = Query(None, description="UUID del proprietario"),
    year: Optional[int] = Query(None, description="Anno del modello"),
    search: Optional[str] = Query(None, description="Ricerca su marca, modello e targa"),
    page: int = Query(1, ge=1, description="Numero pagina"),
    per_page: int = Query(50, ge=1, le=200, description="Elementi per pagina"),
    state: AppState = Depends(get_state),
) -> VehicleList:
    """
    Recupera la lista paginata dei veicoli.

    Returns:
        VehicleList: Lista paginata con metadati
    """
    vehicles, total = vehicle_service.get_all(
        state,
        status=status_filter,
        owner_id=owner_id,
        year=year,
        search=search,
        page=page,
        per_page=per_page,
    )

    return VehicleList(
        items=[VehicleRead.model_validate(v) for v in vehicles],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/{vehicle_id}",
    name="veicolo_dettaglio",
    summary="Dettaglio veicolo",
    response_model=VehicleRead,
    status_code=status.HTTP_200_OK,
)
async def get_vehicle(
    vehicle_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> VehicleRead:
    vehicle = vehicle_service.get_by_id(state, vehicle_id)
    return VehicleRead.model_validate(vehicle)


@router.get(
    "/{vehicle_id}/financials",
    name="veicolo_finanze",
    summary="Indicatori economici del veicolo",
    description="Ricavi, manutenzioni, contravvenzioni, ammortamento e redditività netta.",
    response_model=VehicleFinancials,
    status_code=status.HTTP_200_OK,
)
async def get_vehicle_financials(
    vehicle_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> VehicleFinancials:
    return fleet_report_service.get_vehicle_financials(state, vehicle_id)


@router.post(
    "/",
    name="veicolo_crea",
    summary="Crea veicolo",
    description="Registra un nuovo veicolo per un proprietario esistente.",
    response_model=VehicleRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_vehicle(
    data: VehicleCreate,
    state: AppState = Depends(get_state),
) -> VehicleRead:
    """
    Crea un nuovo veicolo.

    Raises:
        NotFoundError: Se il proprietario non esiste
        DuplicateError: Se la targa è già registrata
        BusinessValidationError: Se date o valore di acquisto non sono validi
    """
    vehicle = vehicle_service.create(state, data)
    return VehicleRead.model_validate(vehicle)


@router.put(
    "/{vehicle_id}",
    name="veicolo_aggiorna",
    summary="Aggiorna veicolo",
    description="Aggiorna parzialmente i dati di un veicolo.",
    response_model=VehicleRead,
    status_code=status.HTTP_200_OK,
)
async def update_vehicle(
    vehicle_id: uuid.UUID,
    data: VehicleUpdate,
    state: AppState = Depends(get_state),
) -> VehicleRead:
    vehicle = vehicle_service.update(state, vehicle_id, data)
    return VehicleRead.model_validate(vehicle)


@router.patch(
    "/{vehicle_id}/status",
    name="veicolo_stato",
    summary="Cambia stato veicolo",
    response_model=VehicleRead,
    status_code=status.HTTP_200_OK,
)
async def update_vehicle_status(
    vehicle_id: uuid.UUID,
    data: VehicleStatusUpdate,
    state: AppState = Depends(get_state),
) -> VehicleRead:
    vehicle = vehicle_service.update_status(state, vehicle_id, data.status)
    return VehicleRead.model_validate(vehicle)


@router.delete(
    "/{vehicle_id}",
    name="veicolo_elimina",
    summary="Elimina veicolo",
    description="Elimina un veicolo senza noleggi in corso.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_vehicle(
    vehicle_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    vehicle_service.delete(state, vehicle_id)
