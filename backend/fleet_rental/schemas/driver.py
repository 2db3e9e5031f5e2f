"""
Schemas Pydantic per gli Autisti
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid

from pydantic import BaseModel, ConfigDict, Field


class DriverCreate(BaseModel):
    """Schema per la creazione di un autista (sempre disponibile alla creazione)."""

    name: str = Field(..., description="Nome completo")
    phone: str = Field(..., description="Telefono")
    license_number: str = Field(..., description="Numero patente")


class DriverAvailabilityUpdate(BaseModel):
    """Schema per il cambio di disponibilità."""

    is_available: bool


class DriverRead(DriverCreate):
    """Schema per la lettura di un autista."""

    id: uuid.UUID
    is_available: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
