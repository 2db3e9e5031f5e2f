"""
Schemas Pydantic per le Contravvenzioni
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ContraventionStatus(str, Enum):
    """Stati di una contravvenzione."""
    UNPAID = "unpaid"
    PAID = "paid"
    DISPUTED = "disputed"


CONTRAVENTION_STATUS_LABELS: dict[ContraventionStatus, str] = {
    ContraventionStatus.UNPAID: "Impayée",
    ContraventionStatus.PAID: "Payée",
    ContraventionStatus.DISPUTED: "Contestée",
}


class ContraventionCreate(BaseModel):
    """Schema per la registrazione di una contravvenzione."""

    vehicle_id: uuid.UUID
    rental_id: Optional[uuid.UUID] = None
    description: str
    date: datetime.date
    amount: Decimal
    status: ContraventionStatus = ContraventionStatus.UNPAID


class ContraventionStatusUpdate(BaseModel):
    """Schema per il cambio di stato di una contravvenzione."""

    status: ContraventionStatus


class ContraventionRead(ContraventionCreate):
    """Schema per la lettura di una contravvenzione."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
