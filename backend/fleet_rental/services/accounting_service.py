"""
Service Layer per la Contabilità
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Aggregazioni derivate dallo stato, senza scritture:
- Registro dei movimenti (ricavi da pagamenti, costi da manutenzioni
  completate e spese)
- Filtri per periodo, tipo, categoria e ricerca
- Riepilogo ricavi/costi/utile, ricavi mensili, ricavi per veicolo
- Livello di fedeltà dei clienti
"""

import datetime
import logging
import uuid
from decimal import Decimal
from typing import Iterable, Optional

from fleet_rental.core.config import settings
from fleet_rental.core.state import AppState
from fleet_rental.schemas.accounting import (
    REVENUE_CATEGORY,
    FinancialReport,
    FinancialSummary,
    MonthlyRevenue,
    ReportPeriod,
    Transaction,
    TransactionType,
    VehicleRevenue,
)
from fleet_rental.schemas.client import ClientLoyalty, LoyaltyTier
from fleet_rental.schemas.maintenance import MaintenanceStatus

# Logger per questo modulo
logger = logging.getLogger(__name__)

MAINTENANCE_CATEGORY = "Maintenance"


def in_period(
    day: datetime.date,
    period: ReportPeriod,
    today: Optional[datetime.date] = None,
) -> bool:
    """True se la data cade nel periodo (relativo a oggi)."""
    today = today or datetime.date.today()

    if period == ReportPeriod.THIS_MONTH:
        return day.year == today.year and day.month == today.month
    if period == ReportPeriod.THIS_YEAR:
        return day.year == today.year
    return True


def loyalty_tier(rental_count: int, lifetime_spend: Decimal) -> LoyaltyTier:
    """
    Livello di fedeltà del cliente.

    - VIP: più di 5 noleggi o spesa totale oltre 500.000
    - Fidèle: almeno 3 noleggi o spesa totale oltre 200.000
    - Nouveau: altrimenti

    Le soglie sono configurabili in settings.
    """
    if (
        rental_count > settings.loyalty_vip_rentals_threshold
        or lifetime_spend > settings.loyalty_vip_spend_threshold
    ):
        return LoyaltyTier.VIP
    if (
        rental_count >= settings.loyalty_loyal_min_rentals
        or lifetime_spend > settings.loyalty_loyal_spend_threshold
    ):
        return LoyaltyTier.FIDELE
    return LoyaltyTier.NOUVEAU


class AccountingService:
    """
    Service per il registro contabile e i report finanziari.

    Tutti i metodi sono di sola lettura e ricalcolano i valori
    dallo stato ad ogni chiamata.
    """

    # ------------------------------------------------------------
    # Registro movimenti
    # ------------------------------------------------------------

    def get_transactions(self, state: AppState) -> list[Transaction]:
        """
        Costruisce il registro dei movimenti, dal più recente.

        - Un ricavo per ogni pagamento di ogni noleggio
        - Un costo per ogni manutenzione completata
        - Un costo per ogni spesa (unici movimenti modificabili)
        """
        transactions = []

        for rental in state.rentals.values():
            for payment in rental.payments:
                transactions.append(
                    Transaction(
                        id=payment.id,
                        type=TransactionType.REVENUE,
                        date=payment.date,
                        description=f"Paiement Location {rental.customer_name}",
                        amount=payment.amount,
                        category=REVENUE_CATEGORY,
                        rental_id=rental.id,
                    )
                )

        for record in state.maintenance_records.values():
            if record.status != MaintenanceStatus.COMPLETED:
                continue
            transactions.append(
                Transaction(
                    id=record.id,
                    type=TransactionType.COST,
                    date=record.date,
                    description=f"Maintenance: {record.description}",
                    amount=-record.cost,
                    category=MAINTENANCE_CATEGORY,
                )
            )

        for expense in state.expenses.values():
            transactions.append(
                Transaction(
                    id=expense.id,
                    type=TransactionType.COST,
                    date=expense.date,
                    description=f"{expense.category}: {expense.description}",
                    amount=-expense.amount,
                    category=expense.category,
                    is_editable=True,
                )
            )

        transactions.sort(key=lambda t: t.date, reverse=True)
        return transactions

    def filter_transactions(
        self,
        transactions: Iterable[Transaction],
        period: ReportPeriod = ReportPeriod.ALL,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        today: Optional[datetime.date] = None,
    ) -> list[Transaction]:
        """
        Filtra i movimenti.

        Args:
            transactions: Movimenti da filtrare
            period: Periodo (all, this_month, this_year)
            type: Ricavi o costi (opzionale)
            category: Categoria esatta (opzionale)
            search: Ricerca case-insensitive sulla descrizione (opzionale)
            today: Data di riferimento del periodo (default oggi)
        """
        term = search.lower() if search else None
        return [
            t for t in transactions
            if in_period(t.date, period, today)
            and (type is None or t.type == type)
            and (category is None or t.category == category)
            and (term is None or term in t.description.lower())
        ]

    # ------------------------------------------------------------
    # Riepiloghi
    # ------------------------------------------------------------

    def get_summary(
        self,
        state: AppState,
        period: ReportPeriod = ReportPeriod.ALL,
        today: Optional[datetime.date] = None,
    ) -> FinancialSummary:
        """Totale ricavi, costi (in valore assoluto) e utile netto per il periodo."""
        transactions = self.filter_transactions(
            self.get_transactions(state), period=period, today=today
        )

        revenue = sum(
            (t.amount for t in transactions if t.type == TransactionType.REVENUE),
            Decimal("0"),
        )
        costs = abs(
            sum(
                (t.amount for t in transactions if t.type == TransactionType.COST),
                Decimal("0"),
            )
        )

        return FinancialSummary(
            period=period,
            revenue=revenue,
            costs=costs,
            net_profit=revenue - costs,
        )

    def get_monthly_revenue(self, state: AppState, year: int) -> MonthlyRevenue:
        """Ricavi da pagamenti suddivisi per mese (gennaio..dicembre)."""
        months = [Decimal("0")] * 12

        for rental in state.rentals.values():
            for payment in rental.payments:
                if payment.date.year == year:
                    months[payment.date.month - 1] += payment.amount

        return MonthlyRevenue(year=year, months=months)

    def get_revenue_by_vehicle(
        self,
        state: AppState,
        period: ReportPeriod = ReportPeriod.ALL,
        today: Optional[datetime.date] = None,
    ) -> list[VehicleRevenue]:
        """
        Ricavi da pagamenti per veicolo nel periodo.

        I veicoli senza ricavi sono esclusi; ordinamento decrescente.
        """
        rows = []

        for vehicle in state.vehicles.values():
            revenue = sum(
                (
                    p.amount
                    for r in state.rentals.values()
                    if r.vehicle_id == vehicle.id
                    for p in r.payments
                    if in_period(p.date, period, today)
                ),
                Decimal("0"),
            )
            if revenue > 0:
                rows.append(
                    VehicleRevenue(
                        vehicle_id=vehicle.id,
                        vehicle_name=vehicle.label,
                        revenue=revenue,
                    )
                )

        rows.sort(key=lambda row: row.revenue, reverse=True)
        return rows

    def get_report(
        self,
        state: AppState,
        period: ReportPeriod = ReportPeriod.ALL,
        today: Optional[datetime.date] = None,
    ) -> FinancialReport:
        """Report completo: riepilogo e ricavi per veicolo."""
        report = FinancialReport(
            summary=self.get_summary(state, period, today),
            revenue_by_vehicle=self.get_revenue_by_vehicle(state, period, today),
        )
        logger.debug(
            f"Report finanziario {period.value}: ricavi {report.summary.revenue}, "
            f"costi {report.summary.costs}"
        )
        return report

    # ------------------------------------------------------------
    # Fedeltà clienti
    # ------------------------------------------------------------

    def client_loyalty(self, state: AppState, client_id: uuid.UUID) -> ClientLoyalty:
        """
        Indicatori di fedeltà di un cliente.

        La spesa totale è la somma degli importi pagati sui suoi noleggi.
        """
        rentals = [r for r in state.rentals.values() if r.client_id == client_id]
        lifetime_spend = sum((r.amount_paid for r in rentals), Decimal("0"))

        return ClientLoyalty(
            rental_count=len(rentals),
            lifetime_spend=lifetime_spend,
            tier=loyalty_tier(len(rentals), lifetime_spend),
        )


# Istanza globale del service
accounting_service = AccountingService()
