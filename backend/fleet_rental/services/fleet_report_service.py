"""
Service Layer per gli indicatori economici dei veicoli
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene:
- Ammortamento e valore corrente stimato
- Riepilogo finanziario per veicolo
- Classifica di redditività (veicoli meno redditizi)
"""

import datetime
import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from fleet_rental.core.state import AppState
from fleet_rental.models import Vehicle
from fleet_rental.schemas.accounting import VehicleFinancials, VehicleProfitability
from fleet_rental.schemas.contravention import ContraventionStatus
from fleet_rental.services.vehicle_service import vehicle_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

DAYS_PER_YEAR = Decimal("365.25")
CENT = Decimal("0.01")


# -------------------------------------------------------------------
# Ammortamento
# -------------------------------------------------------------------

def years_owned(purchase_date: datetime.date, today: Optional[datetime.date] = None) -> Decimal:
    """Anni di possesso (frazionari); una data di acquisto futura vale 0."""
    today = today or datetime.date.today()
    days = max((today - purchase_date).days, 0)
    return Decimal(days) / DAYS_PER_YEAR


def current_value(vehicle: Vehicle, today: Optional[datetime.date] = None) -> Decimal:
    """
    Valore corrente stimato con ammortamento a quote decrescenti.

    current_value = purchase_value * (1 - rate/100) ^ years_owned

    Alla data di acquisto il valore coincide con quello d'acquisto.
    """
    years = years_owned(vehicle.purchase_date, today)
    if years == 0:
        return vehicle.purchase_value.quantize(CENT, rounding=ROUND_HALF_UP)

    factor = Decimal("1") - vehicle.amortization_rate / Decimal("100")
    if factor <= 0:
        return Decimal("0").quantize(CENT)

    value = vehicle.purchase_value * (factor ** years)
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def depreciation(vehicle: Vehicle, today: Optional[datetime.date] = None) -> Decimal:
    """Perdita di valore dalla data di acquisto."""
    return vehicle.purchase_value - current_value(vehicle, today)


# -------------------------------------------------------------------
# Service
# -------------------------------------------------------------------

class FleetReportService:
    """
    Service per gli indicatori economici dei veicoli.

    Il ricavo di un veicolo qui è la somma dei prezzi contrattati
    dei suoi noleggi (non dei pagamenti incassati).
    """

    def _rental_revenue(self, state: AppState, vehicle_id: uuid.UUID) -> Decimal:
        return sum(
            (r.price for r in state.rentals.values() if r.vehicle_id == vehicle_id),
            Decimal("0"),
        )

    def _maintenance_cost(self, state: AppState, vehicle_id: uuid.UUID) -> Decimal:
        return sum(
            (m.cost for m in state.maintenance_records.values() if m.vehicle_id == vehicle_id),
            Decimal("0"),
        )

    def get_vehicle_financials(
        self,
        state: AppState,
        vehicle_id: uuid.UUID,
        today: Optional[datetime.date] = None,
    ) -> VehicleFinancials:
        """
        Riepilogo finanziario di un veicolo.

        net_profitability = ricavi - ammortamento - manutenzioni - contravvenzioni

        Raises:
            NotFoundError: Se il veicolo non esiste
        """
        vehicle = vehicle_service.get_by_id(state, vehicle_id)

        contraventions = [
            c for c in state.contraventions.values() if c.vehicle_id == vehicle.id
        ]
        paid = sum(
            (c.amount for c in contraventions if c.status == ContraventionStatus.PAID),
            Decimal("0"),
        )
        unpaid = sum(
            (c.amount for c in contraventions if c.status == ContraventionStatus.UNPAID),
            Decimal("0"),
        )
        contraventions_cost = sum((c.amount for c in contraventions), Decimal("0"))

        revenue = self._rental_revenue(state, vehicle.id)
        maintenance_cost = self._maintenance_cost(state, vehicle.id)
        value = current_value(vehicle, today)
        lost_value = vehicle.purchase_value - value

        return VehicleFinancials(
            vehicle_id=vehicle.id,
            total_revenue=revenue,
            maintenance_cost=maintenance_cost,
            contraventions_cost=contraventions_cost,
            paid_contraventions=paid,
            unpaid_contraventions=unpaid,
            depreciation=lost_value,
            current_value=value,
            net_profitability=revenue - lost_value - maintenance_cost - contraventions_cost,
        )

    def get_least_profitable(
        self,
        state: AppState,
        limit: int = 5,
        today: Optional[datetime.date] = None,
    ) -> list[VehicleProfitability]:
        """
        Classifica dei veicoli meno redditizi.

        net = ricavi da noleggi - ammortamento - manutenzioni
        (le contravvenzioni non sono considerate). Ordine crescente.
        """
        rows = [
            VehicleProfitability(
                vehicle_id=vehicle.id,
                vehicle_name=vehicle.label,
                net_profit=(
                    self._rental_revenue(state, vehicle.id)
                    - depreciation(vehicle, today)
                    - self._maintenance_cost(state, vehicle.id)
                ),
            )
            for vehicle in state.vehicles.values()
        ]
        rows.sort(key=lambda row: row.net_profit)

        logger.debug(f"Classifica redditività calcolata su {len(rows)} veicoli")

        return rows[:limit]


# Istanza globale del service
fleet_report_service = FleetReportService()
