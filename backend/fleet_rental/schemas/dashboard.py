"""
Schemas Pydantic per avvisi di scadenza, dashboard e calendario
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from fleet_rental.schemas.history import HistoryLogRead
from fleet_rental.schemas.rental import RentalRead


# -------------------------------------------------------------------
# Avvisi di scadenza
# -------------------------------------------------------------------

class DeadlineKind(str, Enum):
    """Tipo di scadenza monitorata sul veicolo."""
    INSURANCE = "insurance"
    MAINTENANCE = "maintenance"
    TECHNICAL_INSPECTION = "technical_inspection"


DEADLINE_KIND_LABELS: dict[DeadlineKind, str] = {
    DeadlineKind.INSURANCE: "Assurance",
    DeadlineKind.MAINTENANCE: "Maintenance",
    DeadlineKind.TECHNICAL_INSPECTION: "Visite Technique",
}


class FleetAlert(BaseModel):
    """Avviso di scadenza imminente per un veicolo."""

    vehicle_id: uuid.UUID
    vehicle_label: str
    plate: str
    deadline_kind: DeadlineKind
    deadline_date: datetime.date
    days_left: int


# -------------------------------------------------------------------
# Dashboard
# -------------------------------------------------------------------

class DashboardStats(BaseModel):
    """Indicatori sintetici per la dashboard."""

    total_vehicles: int
    available_vehicles: int
    rented_vehicles: int
    total_clients: int
    available_drivers: int
    total_revenue: Decimal
    alert_count: int
    active_rentals: list[RentalRead]
    recent_history: list[HistoryLogRead]


# -------------------------------------------------------------------
# Calendario
# -------------------------------------------------------------------

class CalendarEventType(str, Enum):
    """Tipi di evento mostrati nel calendario."""
    RENTAL = "rental"
    RESERVATION = "reservation"
    COMPLETED = "completed"
    MAINTENANCE = "maintenance"
    DEADLINE = "deadline"


class CalendarEvent(BaseModel):
    """Evento giornaliero del calendario."""

    date: datetime.date
    title: str
    type: CalendarEventType
    is_paid: Optional[bool] = None


class CalendarMonth(BaseModel):
    """Eventi di un mese, raggruppati per data ISO."""

    year: int
    month: int
    events: dict[str, list[CalendarEvent]]
