"""
Schemas Pydantic per l'entità Vehicle
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce gli schemi di validazione e serializzazione per l'API.
"""

from enum import Enum
import datetime
import re
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


class VehicleStatus(str, Enum):
    """Stati operativi di un veicolo della flotta."""
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


VEHICLE_STATUS_LABELS: dict[VehicleStatus, str] = {
    VehicleStatus.AVAILABLE: "Disponible",
    VehicleStatus.RENTED: "Loué",
    VehicleStatus.MAINTENANCE: "En Maintenance",
    VehicleStatus.RESERVED: "Réservé",
}


# -------------------------------------------------------------------
# Funzioni di normalizzazione e validazione
# -------------------------------------------------------------------

def normalize_plate(plate: Optional[str]) -> Optional[str]:
    """
    Normalizza la targa del veicolo.

    Converte in maiuscolo e rimuove gli spazi. I trattini sono ammessi
    (es. "AA-123-BB").

    Raises:
        ValueError: Se il formato non è valido
    """
    if plate is None:
        return None

    normalized = plate.strip().upper().replace(" ", "")

    if not re.match(r"^[A-Z0-9-]{2,20}$", normalized):
        raise ValueError(
            "Plaque invalide : 2 à 20 caractères alphanumériques ou tirets"
        )

    return normalized


def validate_year(year: Optional[int]) -> Optional[int]:
    """
    Valida l'anno del modello.

    L'anno deve essere >= 1900 e <= anno corrente + 1.
    """
    if year is None:
        return None

    max_year = datetime.date.today().year + 1

    if year < 1900:
        raise ValueError("L'année doit être supérieure ou égale à 1900")

    if year > max_year:
        raise ValueError(f"L'année ne peut pas dépasser {max_year}")

    return year


# -------------------------------------------------------------------
# Schemas
# -------------------------------------------------------------------

class VehicleBase(BaseModel):
    """Campi condivisi tra creazione e lettura del veicolo."""

    make: str = Field(..., min_length=1, max_length=100, description="Marca")
    model: str = Field(..., min_length=1, max_length=100, description="Modello")
    year: int = Field(..., description="Anno del modello")
    plate: str = Field(..., description="Targa")
    insurance_expiry: Optional[datetime.date] = Field(None, description="Scadenza assicurazione")
    technical_inspection_expiry: Optional[datetime.date] = Field(
        None, description="Scadenza revisione tecnica"
    )
    next_maintenance: Optional[datetime.date] = Field(None, description="Prossima manutenzione")
    current_mileage: int = Field(0, ge=0, description="Chilometraggio attuale")
    owner_id: uuid.UUID = Field(..., description="UUID del proprietario")
    purchase_value: Decimal = Field(Decimal("0"), ge=0, description="Valore di acquisto")
    purchase_date: datetime.date = Field(..., description="Data di acquisto")
    amortization_rate: Decimal = Field(
        Decimal("20"), ge=0, le=100, description="Tasso di ammortamento annuo (%)"
    )
    image_url: Optional[str] = None
    insurance_document_url: Optional[str] = None
    technical_inspection_document_url: Optional[str] = None
    registration_document_url: Optional[str] = None

    check_plate = field_validator("plate", mode="before")(normalize_plate)
    check_year = field_validator("year", mode="before")(validate_year)


class VehicleCreate(VehicleBase):
    """Schema per la creazione di un veicolo."""

    status: VehicleStatus = Field(VehicleStatus.AVAILABLE, description="Stato iniziale")


class VehicleUpdate(BaseModel):
    """Schema per l'aggiornamento parziale di un veicolo."""

    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = None
    plate: Optional[str] = None
    insurance_expiry: Optional[datetime.date] = None
    technical_inspection_expiry: Optional[datetime.date] = None
    next_maintenance: Optional[datetime.date] = None
    current_mileage: Optional[int] = Field(None, ge=0)
    owner_id: Optional[uuid.UUID] = None
    purchase_value: Optional[Decimal] = Field(None, ge=0)
    purchase_date: Optional[datetime.date] = None
    amortization_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    image_url: Optional[str] = None
    insurance_document_url: Optional[str] = None
    technical_inspection_document_url: Optional[str] = None
    registration_document_url: Optional[str] = None

    check_plate = field_validator("plate", mode="before")(normalize_plate)
    check_year = field_validator("year", mode="before")(validate_year)


class VehicleStatusUpdate(BaseModel):
    """Schema per il cambio di stato manuale di un veicolo."""

    status: VehicleStatus


class VehicleRead(VehicleBase):
    """Schema per la lettura di un veicolo."""

    id: uuid.UUID
    status: VehicleStatus
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def label(self) -> str:
        """Marca e modello, per liste e documenti."""
        return f"{self.make} {self.model}"


class VehicleList(BaseModel):
    """Lista paginata di veicoli."""

    items: list[VehicleRead]
    total: int
    page: int
    per_page: int
