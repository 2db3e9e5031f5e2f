"""
Mixin per i modelli di dominio
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Mixin riutilizzabili per aggiungere funzionalità comuni ai modelli.
"""

import datetime
import uuid

from pydantic import BaseModel, Field


def utcnow() -> datetime.datetime:
    """Timestamp corrente con timezone UTC."""
    return datetime.datetime.now(datetime.timezone.utc)


class UUIDMixin(BaseModel):
    """
    Mixin per ID UUID generato server-side.

    Usage:
        class MyModel(UUIDMixin):
            ...
    """

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        description="UUID dell'entità",
    )


class TimestampMixin(BaseModel):
    """
    Mixin per gestione timestamp creazione e aggiornamento.

    Aggiunge i campi:
    - created_at: data/ora di creazione (impostata automaticamente)
    - updated_at: data/ora ultimo aggiornamento (aggiornata da `touch()`)
    """

    created_at: datetime.datetime = Field(
        default_factory=utcnow,
        description="Data/ora di creazione",
    )

    updated_at: datetime.datetime = Field(
        default_factory=utcnow,
        description="Data/ora ultimo aggiornamento",
    )

    def touch(self) -> None:
        """Aggiorna updated_at dopo una modifica."""
        self.updated_at = utcnow()
