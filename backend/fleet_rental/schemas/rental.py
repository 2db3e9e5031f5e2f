"""
Schemas Pydantic per i Noleggi
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene:
- Enum: RentalStatus e matrice delle transizioni
- Schemas per Payment
- Schemas per Rental
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# -------------------------------------------------------------------
# Enum
# -------------------------------------------------------------------

class RentalStatus(str, Enum):
    """Stati del contratto di noleggio."""
    RESERVED = "reserved"
    ACTIVE = "active"
    COMPLETED = "completed"


RENTAL_STATUS_LABELS: dict[RentalStatus, str] = {
    RentalStatus.RESERVED: "Réservé",
    RentalStatus.ACTIVE: "Active",
    RentalStatus.COMPLETED: "Terminée",
}


# -------------------------------------------------------------------
# Matrice delle transizioni di stato (solo in modalità strict)
# -------------------------------------------------------------------

# Nota: viene applicata dal service solo se settings.strict_rental_transitions è True.
# In modalità standard qualsiasi stato può essere assegnato.
VALID_RENTAL_TRANSITIONS: dict[RentalStatus, list[RentalStatus]] = {
    RentalStatus.RESERVED: [RentalStatus.ACTIVE, RentalStatus.COMPLETED],
    RentalStatus.ACTIVE: [RentalStatus.COMPLETED],
    RentalStatus.COMPLETED: [],
}


# -------------------------------------------------------------------
# Schemas per Payment
# -------------------------------------------------------------------

class PaymentCreate(BaseModel):
    """Schema per la registrazione di un pagamento su un noleggio."""

    amount: Decimal = Field(..., description="Importo del pagamento")
    date: datetime.date = Field(
        default_factory=datetime.date.today,
        description="Data del pagamento (default oggi)",
    )


class PaymentRead(BaseModel):
    """Schema per la lettura di un pagamento."""

    id: uuid.UUID
    date: datetime.date
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Schemas per Rental
# -------------------------------------------------------------------

class RentalCreate(BaseModel):
    """
    Schema per la creazione di un noleggio.

    Il prezzo non ha vincoli di schema: il controllo `price > 0`
    avviene nel layer di validazione per restituire motivi leggibili.
    """

    vehicle_id: uuid.UUID = Field(..., description="UUID del veicolo")
    client_id: uuid.UUID = Field(..., description="UUID del cliente")
    driver_id: Optional[uuid.UUID] = Field(None, description="UUID dell'autista (opzionale)")
    affiliate_id: Optional[uuid.UUID] = Field(None, description="UUID del partner (opzionale)")
    start_date: datetime.date = Field(..., description="Data di inizio")
    end_date: datetime.date = Field(..., description="Data di fine")
    price: Decimal = Field(..., description="Prezzo totale contrattato")


class RentalStatusUpdate(BaseModel):
    """Schema per il cambio di stato di un noleggio."""

    status: RentalStatus


class RentalRead(BaseModel):
    """Schema per la lettura di un noleggio con i campi finanziari derivati."""

    id: uuid.UUID
    vehicle_id: uuid.UUID
    client_id: uuid.UUID
    driver_id: Optional[uuid.UUID]
    affiliate_id: Optional[uuid.UUID]
    customer_name: str
    start_date: datetime.date
    end_date: datetime.date
    price: Decimal
    status: RentalStatus
    payments: list[PaymentRead]
    amount_paid: Decimal
    balance_due: Decimal
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def display_balance_due(self) -> Decimal:
        """Saldo da mostrare: mai negativo."""
        return max(self.balance_due, Decimal("0"))

    @computed_field
    @property
    def is_paid(self) -> bool:
        """True se il saldo è interamente coperto."""
        return self.balance_due <= 0


class RentalList(BaseModel):
    """Lista paginata di noleggi."""

    items: list[RentalRead]
    total: int
    page: int
    per_page: int
