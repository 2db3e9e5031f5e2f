"""
Schemas Pydantic per Proprietari e Partner (affiliati)
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -------------------------------------------------------------------
# Proprietari
# -------------------------------------------------------------------

class OwnerCreate(BaseModel):
    """Schema per la creazione di un proprietario di veicoli."""

    name: str
    phone: str
    email: str
    payment_details: str = Field("", description="Coordinate di pagamento (IBAN, mobile money...)")
    image_url: Optional[str] = None


class OwnerRead(OwnerCreate):
    """Schema per la lettura di un proprietario."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Partner / affiliati
# -------------------------------------------------------------------

class AffiliateCreate(BaseModel):
    """Schema per la creazione di un partner commerciale."""

    name: str
    phone: str
    commission_rate: Decimal = Field(Decimal("0"), description="Commissione in percentuale")
    image_url: Optional[str] = None


class AffiliateRead(AffiliateCreate):
    """Schema per la lettura di un partner."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
