"""
Schemas Pydantic per lo storico delle operazioni
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict


class HistoryEntity(str, Enum):
    """Tipi di entità tracciate nello storico."""
    VEHICLE = "vehicle"
    CLIENT = "client"
    DRIVER = "driver"
    RENTAL = "rental"
    MAINTENANCE = "maintenance"
    CONTRAVENTION = "contravention"
    OWNER = "owner"
    AFFILIATE = "affiliate"
    ACCIDENT = "accident"


class HistoryLogRead(BaseModel):
    """Voce dello storico (sola lettura)."""

    id: uuid.UUID
    timestamp: datetime.datetime
    entity: HistoryEntity
    entity_id: uuid.UUID
    details: str

    model_config = ConfigDict(from_attributes=True)
