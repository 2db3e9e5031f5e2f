"""
Modello di dominio per l'entità Vehicle
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import Field

from fleet_rental.models.mixins import TimestampMixin, UUIDMixin
from fleet_rental.schemas.vehicle import VehicleStatus


class Vehicle(UUIDMixin, TimestampMixin):
    """
    Veicolo della flotta.

    Appartiene a un solo proprietario (owner_id). Le tre date di
    scadenza alimentano gli avvisi; i campi finanziari servono solo
    alla stima di ammortamento.
    """

    make: str
    model: str
    year: int
    plate: str
    status: VehicleStatus = VehicleStatus.AVAILABLE

    insurance_expiry: Optional[datetime.date] = None
    technical_inspection_expiry: Optional[datetime.date] = None
    next_maintenance: Optional[datetime.date] = None
    current_mileage: int = 0

    owner_id: uuid.UUID

    purchase_value: Decimal = Decimal("0")
    purchase_date: datetime.date
    amortization_rate: Decimal = Field(Decimal("20"), description="Percentuale annua")

    image_url: Optional[str] = None
    insurance_document_url: Optional[str] = None
    technical_inspection_document_url: Optional[str] = None
    registration_document_url: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.make} {self.model}"
