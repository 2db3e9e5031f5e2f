"""
Schemas Pydantic per Manutenzioni e Sinistri
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -------------------------------------------------------------------
# Enum
# -------------------------------------------------------------------

class MaintenanceStatus(str, Enum):
    """Stati di un intervento di manutenzione."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AccidentStatus(str, Enum):
    """Stati della pratica di sinistro."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REPAIRED = "repaired"
    CLOSED = "closed"


class AccidentSeverity(str, Enum):
    """Gravità del sinistro."""
    LIGHT = "light"
    MODERATE = "moderate"
    SEVERE = "severe"


MAINTENANCE_STATUS_LABELS: dict[MaintenanceStatus, str] = {
    MaintenanceStatus.TODO: "À faire",
    MaintenanceStatus.IN_PROGRESS: "En cours",
    MaintenanceStatus.COMPLETED: "Terminé",
}

ACCIDENT_STATUS_LABELS: dict[AccidentStatus, str] = {
    AccidentStatus.PENDING: "En attente",
    AccidentStatus.IN_PROGRESS: "En réparation",
    AccidentStatus.REPAIRED: "Réparé",
    AccidentStatus.CLOSED: "Clôturé",
}


# -------------------------------------------------------------------
# Manutenzioni
# -------------------------------------------------------------------

class MaintenanceCreate(BaseModel):
    """Schema per la pianificazione di un intervento di manutenzione."""

    vehicle_id: uuid.UUID
    description: str
    date: datetime.date
    cost: Decimal = Field(Decimal("0"), description="Costo dell'intervento")
    status: MaintenanceStatus = MaintenanceStatus.TODO
    mileage: int = Field(0, ge=0)
    parts_replaced: Optional[str] = None
    garage: Optional[str] = None


class MaintenanceStatusUpdate(BaseModel):
    """Schema per il cambio di stato di una manutenzione."""

    status: MaintenanceStatus


class MaintenanceRead(MaintenanceCreate):
    """Schema per la lettura di una manutenzione."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Sinistri
# -------------------------------------------------------------------

class AccidentCreate(BaseModel):
    """Schema per la dichiarazione di un sinistro (stato iniziale: pending)."""

    vehicle_id: uuid.UUID
    rental_id: Optional[uuid.UUID] = None
    date: datetime.date
    description: str
    severity: AccidentSeverity = AccidentSeverity.LIGHT
    estimated_cost: Decimal = Decimal("0")
    final_cost: Optional[Decimal] = None
    insurance_claim_id: Optional[str] = None
    repaired_parts: Optional[str] = None
    replaced_parts: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)


class AccidentStatusUpdate(BaseModel):
    """Schema per il cambio di stato di un sinistro."""

    status: AccidentStatus
    final_cost: Optional[Decimal] = Field(None, ge=0, description="Costo finale, se noto")


class AccidentRead(AccidentCreate):
    """Schema per la lettura di un sinistro."""

    id: uuid.UUID
    status: AccidentStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
