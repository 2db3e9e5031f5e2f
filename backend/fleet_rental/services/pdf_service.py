"""
Service per la generazione di PDF con WeasyPrint + Jinja2.
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Documenti generati:
- Contratto di noleggio
- Report finanziario per periodo
"""

import datetime
import logging
import os
from decimal import Decimal

from jinja2 import Environment, FileSystemLoader, select_autoescape

from fleet_rental.core.config import settings
from fleet_rental.models import Client, Rental, Vehicle
from fleet_rental.schemas.accounting import REPORT_PERIOD_LABELS, FinancialReport

logger = logging.getLogger(__name__)

# Path alla cartella templates
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")


# Lazy import of weasyprint to avoid startup errors if system libraries aren't available
def _get_weasyprint():
    """Lazy import of weasyprint to handle missing Pango/GTK libraries gracefully."""
    try:
        from weasyprint import CSS, HTML
        return HTML, CSS
    except OSError as e:
        raise RuntimeError(
            "WeasyPrint dependencies not found. Please install Pango: "
            "apt install libpango-1.0-0 libpangoft2-1.0-0 (or brew install pango)"
        ) from e


# -------------------------------------------------------------------
# Filtri Jinja2
# -------------------------------------------------------------------

def format_amount(value) -> str:
    """Importo con separatore delle migliaia alla francese (es. 175 000)."""
    amount = Decimal(value)
    if amount == amount.to_integral_value():
        text = f"{amount:,.0f}"
    else:
        text = f"{amount:,.2f}".replace(".", "#")
    return text.replace(",", " ").replace("#", ",")


def format_date(value: datetime.date) -> str:
    return value.strftime("%d/%m/%Y")


class PdfService:
    """
    Genera PDF da template HTML/CSS usando WeasyPrint + Jinja2.

    La parte HTML (`render_*_html`) è separata dalla conversione in PDF
    (`generate_*_pdf`) così il contenuto si può verificare senza WeasyPrint.
    """

    def __init__(self):
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["amount"] = format_amount
        self.env.filters["fr_date"] = format_date

    def _company_context(self) -> dict:
        return {
            "company_name": settings.company_name,
            "company_address": settings.company_address,
            "currency": settings.currency,
            "oggi": format_date(datetime.date.today()),
        }

    def _to_pdf(self, html_out: str) -> bytes:
        # Lazy import weasyprint
        HTML, CSS = _get_weasyprint()
        css = CSS(filename=os.path.join(TEMPLATES_DIR, "report_style.css"))
        return HTML(string=html_out, base_url=TEMPLATES_DIR).write_pdf(stylesheets=[css])

    # ------------------------------------------------------------
    # Contratto di noleggio
    # ------------------------------------------------------------

    def render_contract_html(self, rental: Rental, vehicle: Vehicle, client: Client) -> str:
        """HTML del contratto di noleggio."""
        template = self.env.get_template("contract_template.html")
        context = {
            **self._company_context(),
            "rental": rental,
            "vehicle": vehicle,
            "client": client,
        }
        return template.render(context)

    def generate_contract_pdf(self, rental: Rental, vehicle: Vehicle, client: Client) -> bytes:
        """
        Genera il PDF del contratto di noleggio.

        Returns:
            bytes: PDF binario pronto per il download
        """
        pdf_bytes = self._to_pdf(self.render_contract_html(rental, vehicle, client))
        logger.info(f"Contratto PDF generato per noleggio {rental.id}")
        return pdf_bytes

    # ------------------------------------------------------------
    # Report finanziario
    # ------------------------------------------------------------

    def render_financial_report_html(self, report: FinancialReport) -> str:
        """HTML del report finanziario (riepilogo e ricavi per veicolo)."""
        template = self.env.get_template("financial_report_template.html")
        context = {
            **self._company_context(),
            "period_label": REPORT_PERIOD_LABELS[report.summary.period],
            "summary": report.summary,
            "revenue_by_vehicle": report.revenue_by_vehicle,
        }
        return template.render(context)

    def generate_financial_report_pdf(self, report: FinancialReport) -> bytes:
        pdf_bytes = self._to_pdf(self.render_financial_report_html(report))
        logger.info(f"Report finanziario PDF generato ({report.summary.period.value})")
        return pdf_bytes


# Istanza globale del service
pdf_service = PdfService()
