"""
Modelli di dominio per le anagrafiche: clienti, autisti, proprietari, partner
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

from decimal import Decimal
from typing import Optional

from fleet_rental.models.mixins import TimestampMixin, UUIDMixin


class Client(UUIDMixin, TimestampMixin):
    """Cliente che sottoscrive i contratti di noleggio."""

    name: str
    phone: str
    email: str
    license_number: str
    notes: Optional[str] = None
    image_url: Optional[str] = None
    id_document_url: Optional[str] = None


class Driver(UUIDMixin, TimestampMixin):
    """
    Autista messo a disposizione con il veicolo.

    is_available viene aggiornato dal ciclo di vita del noleggio.
    """

    name: str
    phone: str
    license_number: str
    is_available: bool = True


class Owner(UUIDMixin, TimestampMixin):
    """Proprietario dei veicoli in gestione."""

    name: str
    phone: str
    email: str
    payment_details: str = ""
    image_url: Optional[str] = None


class Affiliate(UUIDMixin, TimestampMixin):
    """Partner commerciale che procura noleggi a commissione."""

    name: str
    phone: str
    commission_rate: Decimal = Decimal("0")
    image_url: Optional[str] = None
