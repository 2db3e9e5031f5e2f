"""
Router FastAPI per Contabilità e Report
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce gli endpoint per:
- Registro dei movimenti (ricavi e costi) con filtri
- Riepiloghi, ricavi mensili e per veicolo
- Classifica di redditività della flotta
- Export CSV e report PDF
"""

import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.accounting import (
    FinancialReport,
    FinancialSummary,
    MonthlyRevenue,
    ReportPeriod,
    Transaction,
    TransactionType,
    VehicleProfitability,
    VehicleRevenue,
)
from fleet_rental.services.accounting_service import accounting_service
from fleet_rental.services.export_service import CSV_FILENAME, export_service
from fleet_rental.services.fleet_report_service import fleet_report_service
from fleet_rental.services.pdf_service import pdf_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/accounting",
    tags=["Contabilità"],
)


def _filtered_transactions(
    state: AppState,
    period: ReportPeriod,
    type_filter: Optional[TransactionType],
    category: Optional[str],
    search: Optional[str],
) -> list[Transaction]:
    return accounting_service.filter_transactions(
        accounting_service.get_transactions(state),
        period=period,
        type=type_filter,
        category=category,
        search=search,
    )


# -------------------------------------------------------------------
# Movimenti
# -------------------------------------------------------------------

@router.get(
    "/transactions",
    name="contabilita_movimenti",
    summary="Registro movimenti",
    description="Ricavi dai pagamenti e costi da manutenzioni completate e spese, dal più recente.",
    response_model=list[Transaction],
    status_code=status.HTTP_200_OK,
)
async def get_transactions(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    type_filter: Optional[TransactionType] = Query(None, alias="type", description="Ricavi o costi"),
    category: Optional[str] = Query(None, description="Categoria"),
    search: Optional[str] = Query(None, description="Ricerca nella descrizione"),
    state: AppState = Depends(get_state),
) -> list[Transaction]:
    return _filtered_transactions(state, period, type_filter, category, search)


@router.get(
    "/transactions.csv",
    name="contabilita_export_csv",
    summary="Export CSV movimenti",
    description="Esporta i movimenti filtrati in CSV (UTF-8 con BOM).",
    response_class=Response,
    status_code=status.HTTP_200_OK,
)
async def export_transactions_csv(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    type_filter: Optional[TransactionType] = Query(None, alias="type", description="Ricavi o costi"),
    category: Optional[str] = Query(None, description="Categoria"),
    search: Optional[str] = Query(None, description="Ricerca nella descrizione"),
    state: AppState = Depends(get_state),
) -> Response:
    transactions = _filtered_transactions(state, period, type_filter, category, search)
    content = export_service.transactions_to_csv(transactions)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )


# -------------------------------------------------------------------
# Riepiloghi
# -------------------------------------------------------------------

@router.get(
    "/summary",
    name="contabilita_riepilogo",
    summary="Riepilogo finanziario",
    response_model=FinancialSummary,
    status_code=status.HTTP_200_OK,
)
async def get_summary(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    state: AppState = Depends(get_state),
) -> FinancialSummary:
    return accounting_service.get_summary(state, period)


@router.get(
    "/monthly-revenue",
    name="contabilita_ricavi_mensili",
    summary="Ricavi mensili",
    response_model=MonthlyRevenue,
    status_code=status.HTTP_200_OK,
)
async def get_monthly_revenue(
    year: Optional[int] = Query(None, ge=1900, le=2100, description="Anno (default anno corrente)"),
    state: AppState = Depends(get_state),
) -> MonthlyRevenue:
    return accounting_service.get_monthly_revenue(state, year or datetime.date.today().year)


@router.get(
    "/revenue-by-vehicle",
    name="contabilita_ricavi_veicolo",
    summary="Ricavi per veicolo",
    response_model=list[VehicleRevenue],
    status_code=status.HTTP_200_OK,
)
async def get_revenue_by_vehicle(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    state: AppState = Depends(get_state),
) -> list[VehicleRevenue]:
    return accounting_service.get_revenue_by_vehicle(state, period)


@router.get(
    "/profitability",
    name="contabilita_redditivita",
    summary="Veicoli meno redditizi",
    description="Classifica crescente per utile netto (ricavi - ammortamento - manutenzioni).",
    response_model=list[VehicleProfitability],
    status_code=status.HTTP_200_OK,
)
async def get_least_profitable(
    limit: int = Query(5, ge=1, le=100, description="Numero di veicoli"),
    state: AppState = Depends(get_state),
) -> list[VehicleProfitability]:
    return fleet_report_service.get_least_profitable(state, limit=limit)


# -------------------------------------------------------------------
# Report
# -------------------------------------------------------------------

@router.get(
    "/report",
    name="contabilita_report",
    summary="Report finanziario",
    response_model=FinancialReport,
    status_code=status.HTTP_200_OK,
)
async def get_report(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    state: AppState = Depends(get_state),
) -> FinancialReport:
    return accounting_service.get_report(state, period)


@router.get(
    "/report.pdf",
    name="contabilita_report_pdf",
    summary="Report finanziario (PDF)",
    response_class=Response,
    status_code=status.HTTP_200_OK,
)
async def get_report_pdf(
    period: ReportPeriod = Query(ReportPeriod.ALL, description="Periodo"),
    state: AppState = Depends(get_state),
) -> Response:
    report = accounting_service.get_report(state, period)
    pdf_bytes = pdf_service.generate_financial_report_pdf(report)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="rapport-{period.value}.pdf"'},
    )
