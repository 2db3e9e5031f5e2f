"""
Modelli di dominio per gli eventi sui veicoli e per la contabilità
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene: MaintenanceRecord, Accident, Contravention, Expense, HistoryLog.
"""

import datetime
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field

from fleet_rental.models.mixins import TimestampMixin, UUIDMixin, utcnow
from fleet_rental.schemas.contravention import ContraventionStatus
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.maintenance import (
    AccidentSeverity,
    AccidentStatus,
    MaintenanceStatus,
)


class MaintenanceRecord(UUIDMixin, TimestampMixin):
    """Intervento di manutenzione su un veicolo."""

    vehicle_id: uuid.UUID
    description: str
    date: datetime.date
    cost: Decimal = Decimal("0")
    status: MaintenanceStatus = MaintenanceStatus.TODO
    mileage: int = 0
    parts_replaced: Optional[str] = None
    garage: Optional[str] = None


class Accident(UUIDMixin, TimestampMixin):
    """Sinistro su un veicolo, eventualmente durante un noleggio."""

    vehicle_id: uuid.UUID
    rental_id: Optional[uuid.UUID] = None
    date: datetime.date
    description: str
    severity: AccidentSeverity = AccidentSeverity.LIGHT
    estimated_cost: Decimal = Decimal("0")
    final_cost: Optional[Decimal] = None
    status: AccidentStatus = AccidentStatus.PENDING
    insurance_claim_id: Optional[str] = None
    repaired_parts: Optional[str] = None
    replaced_parts: Optional[str] = None
    mileage: Optional[int] = None


class Contravention(UUIDMixin, TimestampMixin):
    """Contravvenzione stradale legata a un veicolo (ed eventualmente a un noleggio)."""

    vehicle_id: uuid.UUID
    rental_id: Optional[uuid.UUID] = None
    description: str
    date: datetime.date
    amount: Decimal
    status: ContraventionStatus = ContraventionStatus.UNPAID


class Expense(UUIDMixin, TimestampMixin):
    """Spesa generica inserita a mano, non legata a un veicolo."""

    date: datetime.date
    description: str
    category: str
    amount: Decimal


class HistoryLog(UUIDMixin):
    """Voce dello storico. Append-only, mai modificata."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime.datetime = Field(default_factory=utcnow)
    entity: HistoryEntity
    entity_id: uuid.UUID
    details: str
