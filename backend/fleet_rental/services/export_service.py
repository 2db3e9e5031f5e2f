"""
Service per l'export CSV dei movimenti contabili
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Formato compatibile con Excel in locale francese:
- UTF-8 con BOM
- separatore virgola, righe separate da \\n
- date dd/mm/YYYY
- descrizione sempre tra virgolette (virgolette interne raddoppiate)
"""

import logging
from typing import Iterable

from fleet_rental.core.config import settings
from fleet_rental.schemas.accounting import Transaction

# Logger per questo modulo
logger = logging.getLogger(__name__)

BOM = "\ufeff"
CSV_FILENAME = "transactions-carmixt.csv"


def csv_header() -> list[str]:
    return ["Date", "Description", f"Montant ({settings.currency})", "Type", "Catégorie"]


def quote(text: str) -> str:
    """Racchiude il testo tra virgolette, raddoppiando quelle interne."""
    return '"' + text.replace('"', '""') + '"'


class ExportService:
    """Genera i file di export dei movimenti."""

    def transaction_row(self, transaction: Transaction) -> str:
        return ",".join(
            [
                transaction.date.strftime("%d/%m/%Y"),
                quote(transaction.description),
                format(transaction.amount, "f"),
                transaction.type.value,
                transaction.category,
            ]
        )

    def transactions_to_csv(self, transactions: Iterable[Transaction]) -> bytes:
        """
        Esporta i movimenti in CSV.

        Args:
            transactions: Movimenti (già filtrati) nell'ordine desiderato

        Returns:
            bytes: contenuto CSV codificato UTF-8 con BOM
        """
        lines = [",".join(csv_header())]
        lines.extend(self.transaction_row(t) for t in transactions)

        logger.info(f"Export CSV generato: {len(lines) - 1} movimenti")

        return (BOM + "\n".join(lines)).encode("utf-8")


# Istanza globale del service
export_service = ExportService()
