"""
Router FastAPI per gli Autisti
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.driver import DriverAvailabilityUpdate, DriverCreate, DriverRead
from fleet_rental.services.driver_service import driver_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/drivers",
    tags=["Autisti"],
)


@router.get(
    "/",
    name="autisti_lista",
    summary="Lista autisti",
    response_model=list[DriverRead],
    status_code=status.HTTP_200_OK,
)
async def get_drivers(
    is_available: Optional[bool] = Query(None, description="Filtro per disponibilità"),
    state: AppState = Depends(get_state),
) -> list[DriverRead]:
    drivers = driver_service.get_all(state, is_available=is_available)
    return [DriverRead.model_validate(d) for d in drivers]


@router.post(
    "/",
    name="autista_crea",
    summary="Crea autista",
    response_model=DriverRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_driver(
    data: DriverCreate,
    state: AppState = Depends(get_state),
) -> DriverRead:
    return DriverRead.model_validate(driver_service.create(state, data))


@router.patch(
    "/{driver_id}/availability",
    name="autista_disponibilita",
    summary="Cambia disponibilità autista",
    response_model=DriverRead,
    status_code=status.HTTP_200_OK,
)
async def set_driver_availability(
    driver_id: uuid.UUID,
    data: DriverAvailabilityUpdate,
    state: AppState = Depends(get_state),
) -> DriverRead:
    driver = driver_service.set_availability(state, driver_id, data.is_available)
    return DriverRead.model_validate(driver)


@router.delete(
    "/{driver_id}",
    name="autista_elimina",
    summary="Elimina autista",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_driver(
    driver_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    driver_service.delete(state, driver_id)
