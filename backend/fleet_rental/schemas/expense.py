"""
Schemas Pydantic per le Spese
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Categorie ammesse per le spese inserite manualmente
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Fonctionnement",
    "Salaires",
    "Carburant",
    "Achat",
    "Fournitures",
    "Maintenance",
    "Autre",
)


class ExpenseCreate(BaseModel):
    """Schema per la registrazione di una spesa."""

    date: datetime.date = Field(default_factory=datetime.date.today)
    description: str
    category: str = "Fonctionnement"
    amount: Decimal


class ExpenseUpdate(BaseModel):
    """Schema per la modifica parziale di una spesa."""

    date: Optional[datetime.date] = None
    description: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = None


class ExpenseRead(ExpenseCreate):
    """Schema per la lettura di una spesa."""

    id: uuid.UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
