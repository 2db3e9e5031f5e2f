"""
Router FastAPI per Dashboard, Avvisi di scadenza e Storico
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.dashboard import CalendarMonth, DashboardStats, FleetAlert
from fleet_rental.schemas.history import HistoryEntity, HistoryLogRead
from fleet_rental.services.alert_service import compute_alerts
from fleet_rental.services.dashboard_service import dashboard_service
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router dashboard e calendario
router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)

# Router avvisi
alerts_router = APIRouter(
    prefix="/alerts",
    tags=["Avvisi"],
)

# Router storico
history_router = APIRouter(
    prefix="/history",
    tags=["Storico"],
)


# -------------------------------------------------------------------
# Dashboard
# -------------------------------------------------------------------

@router.get(
    "/",
    name="dashboard_indicatori",
    summary="Indicatori dashboard",
    response_model=DashboardStats,
    status_code=status.HTTP_200_OK,
)
async def get_dashboard(state: AppState = Depends(get_state)) -> DashboardStats:
    return dashboard_service.get_stats(state)


@router.get(
    "/calendar",
    name="dashboard_calendario",
    summary="Calendario mensile",
    description="Noleggi, manutenzioni e scadenze del mese, raggruppati per giorno.",
    response_model=CalendarMonth,
    status_code=status.HTTP_200_OK,
)
async def get_calendar(
    year: Optional[int] = Query(None, ge=1900, le=2100, description="Anno (default corrente)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Mese (default corrente)"),
    state: AppState = Depends(get_state),
) -> CalendarMonth:
    today = datetime.date.today()
    return dashboard_service.get_calendar(state, year or today.year, month or today.month)


# -------------------------------------------------------------------
# Avvisi di scadenza
# -------------------------------------------------------------------

@alerts_router.get(
    "/",
    name="avvisi_scadenze",
    summary="Scadenze imminenti",
    description=(
        "Assicurazione, manutenzione e revisione in scadenza entro l'orizzonte, "
        "dalla più urgente."
    ),
    response_model=list[FleetAlert],
    status_code=status.HTTP_200_OK,
)
async def get_alerts(
    horizon_days: Optional[int] = Query(None, ge=0, description="Orizzonte in giorni (default da configurazione)"),
    include_expired: bool = Query(False, description="Includi anche le scadenze già passate"),
    state: AppState = Depends(get_state),
) -> list[FleetAlert]:
    return compute_alerts(
        state.vehicles.values(),
        horizon_days=horizon_days,
        include_expired=include_expired,
    )


# -------------------------------------------------------------------
# Storico
# -------------------------------------------------------------------

@history_router.get(
    "/",
    name="storico_lista",
    summary="Storico operazioni",
    response_model=list[HistoryLogRead],
    status_code=status.HTTP_200_OK,
)
async def get_history(
    entity: Optional[HistoryEntity] = Query(None, description="Tipo di entità"),
    entity_id: Optional[uuid.UUID] = Query(None, description="UUID dell'entità"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Numero massimo di voci"),
    state: AppState = Depends(get_state),
) -> list[HistoryLogRead]:
    entries = history_service.get_all(state, entity=entity, entity_id=entity_id, limit=limit)
    return [HistoryLogRead.model_validate(h) for h in entries]
