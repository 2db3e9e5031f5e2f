"""
Modelli di dominio per Noleggi e Pagamenti
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import datetime
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field

from fleet_rental.models.mixins import TimestampMixin, UUIDMixin
from fleet_rental.schemas.rental import RentalStatus


class Payment(UUIDMixin):
    """Pagamento registrato su un noleggio. Immutabile dopo la creazione."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    amount: Decimal


class Rental(UUIDMixin, TimestampMixin):
    """
    Contratto di noleggio.

    amount_paid e balance_due sono campi derivati dai pagamenti e
    vanno ricalcolati con `recompute_balance()` dopo ogni modifica:
    amount_paid + balance_due == price in ogni momento.
    balance_due non viene mai limitato a zero.
    """

    vehicle_id: uuid.UUID
    client_id: uuid.UUID
    driver_id: Optional[uuid.UUID] = None
    affiliate_id: Optional[uuid.UUID] = None
    customer_name: str
    start_date: datetime.date
    end_date: datetime.date
    price: Decimal
    status: RentalStatus = RentalStatus.RESERVED
    payments: list[Payment] = Field(default_factory=list)
    amount_paid: Decimal = Decimal("0")
    balance_due: Decimal = Decimal("0")

    def recompute_balance(self) -> None:
        """Ricalcola amount_paid e balance_due dalla lista dei pagamenti."""
        self.amount_paid = sum((p.amount for p in self.payments), Decimal("0"))
        self.balance_due = self.price - self.amount_paid

    @property
    def is_paid(self) -> bool:
        return self.balance_due <= 0
