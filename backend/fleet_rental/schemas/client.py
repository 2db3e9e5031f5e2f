"""
Schemas Pydantic per l'entità Client
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fleet_rental.schemas.history import HistoryLogRead


class LoyaltyTier(str, Enum):
    """Livello di fedeltà del cliente."""
    NOUVEAU = "nouveau"
    FIDELE = "fidele"
    VIP = "vip"


LOYALTY_TIER_LABELS: dict[LoyaltyTier, str] = {
    LoyaltyTier.NOUVEAU: "Nouveau",
    LoyaltyTier.FIDELE: "Fidèle",
    LoyaltyTier.VIP: "VIP",
}


class ClientBase(BaseModel):
    """
    Campi anagrafici del cliente.

    Il formato di telefono ed email è controllato dal layer di validazione.
    """

    name: str = Field(..., description="Nome completo")
    phone: str = Field(..., description="Telefono")
    email: str = Field(..., description="Email")
    license_number: str = Field(..., description="Numero patente")
    notes: Optional[str] = None
    image_url: Optional[str] = None
    id_document_url: Optional[str] = None


class ClientCreate(ClientBase):
    """Schema per la creazione di un cliente."""
    pass


class ClientUpdate(BaseModel):
    """Schema per la modifica parziale di un cliente."""

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    license_number: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    id_document_url: Optional[str] = None


class ClientRead(ClientBase):
    """Schema per la lettura di un cliente."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class ClientList(BaseModel):
    """Lista paginata di clienti."""

    items: list[ClientRead]
    total: int
    page: int
    per_page: int


class ClientLoyalty(BaseModel):
    """Indicatori di fedeltà calcolati dai noleggi del cliente."""

    rental_count: int
    lifetime_spend: Decimal
    tier: LoyaltyTier


class ClientDetail(ClientRead):
    """Dettaglio cliente con fedeltà e storico."""

    loyalty: ClientLoyalty
    history: list[HistoryLogRead] = Field(default_factory=list)
