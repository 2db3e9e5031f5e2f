"""
Schemas Pydantic per Contabilità e Report
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene:
- Enums: TransactionType, ReportPeriod
- Movimenti di cassa (Transaction) e riepiloghi
- Indicatori finanziari per veicolo
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TransactionType(str, Enum):
    """Tipo di movimento."""
    REVENUE = "revenue"
    COST = "cost"


class ReportPeriod(str, Enum):
    """Periodo di riferimento per filtri e report."""
    ALL = "all"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"


REPORT_PERIOD_LABELS: dict[ReportPeriod, str] = {
    ReportPeriod.ALL: "Tout l'historique",
    ReportPeriod.THIS_MONTH: "Ce mois-ci",
    ReportPeriod.THIS_YEAR: "Cette année",
}

# Categoria assegnata ai movimenti di ricavo
REVENUE_CATEGORY = "Revenu"


class Transaction(BaseModel):
    """
    Movimento del registro contabile.

    I ricavi hanno importo positivo, i costi importo negativo.
    """

    id: uuid.UUID
    type: TransactionType
    date: datetime.date
    description: str
    amount: Decimal
    category: str
    is_editable: bool = Field(False, description="True solo per le spese inserite manualmente")
    rental_id: Optional[uuid.UUID] = None


class FinancialSummary(BaseModel):
    """Totali di ricavi, costi e utile per un periodo."""

    period: ReportPeriod
    revenue: Decimal
    costs: Decimal
    net_profit: Decimal


class MonthlyRevenue(BaseModel):
    """Ricavi mensili (12 valori, gennaio..dicembre) per un anno."""

    year: int
    months: list[Decimal]


class VehicleRevenue(BaseModel):
    """Ricavo generato da un veicolo nel periodo."""

    vehicle_id: uuid.UUID
    vehicle_name: str
    revenue: Decimal


class FinancialReport(BaseModel):
    """Report finanziario completo per un periodo."""

    summary: FinancialSummary
    revenue_by_vehicle: list[VehicleRevenue]


class VehicleFinancials(BaseModel):
    """Indicatori economici di un singolo veicolo."""

    vehicle_id: uuid.UUID
    total_revenue: Decimal
    maintenance_cost: Decimal
    contraventions_cost: Decimal
    paid_contraventions: Decimal
    unpaid_contraventions: Decimal
    depreciation: Decimal
    current_value: Decimal
    net_profitability: Decimal


class VehicleProfitability(BaseModel):
    """Voce della classifica di redditività."""

    vehicle_id: uuid.UUID
    vehicle_name: str
    net_profit: Decimal
