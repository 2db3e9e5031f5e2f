"""
Motore degli avvisi di scadenza della flotta
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Calcola le scadenze imminenti (assicurazione, manutenzione,
revisione tecnica) entro un orizzonte in giorni, ordinate per urgenza.
"""

import datetime
import logging
from typing import Iterable, Optional

from fleet_rental.core.config import settings
from fleet_rental.models import Vehicle
from fleet_rental.schemas.dashboard import DeadlineKind, FleetAlert

# Logger per questo modulo
logger = logging.getLogger(__name__)


# Campi data controllati, nell'ordine di emissione per veicolo
DEADLINE_FIELDS: tuple[tuple[DeadlineKind, str], ...] = (
    (DeadlineKind.INSURANCE, "insurance_expiry"),
    (DeadlineKind.MAINTENANCE, "next_maintenance"),
    (DeadlineKind.TECHNICAL_INSPECTION, "technical_inspection_expiry"),
)


def compute_alerts(
    vehicles: Iterable[Vehicle],
    today: Optional[datetime.date] = None,
    horizon_days: Optional[int] = None,
    include_expired: bool = False,
) -> list[FleetAlert]:
    """
    Calcola gli avvisi di scadenza per un insieme di veicoli.

    Funzione pura: non legge né modifica lo stato applicativo.

    Un avviso viene emesso se 0 <= days_left <= horizon_days.
    Con include_expired=True vengono emesse anche le scadenze già
    passate (days_left negativo).

    Args:
        vehicles: Veicoli da controllare
        today: Data di riferimento (default oggi)
        horizon_days: Orizzonte in giorni (default settings.alert_horizon_days)
        include_expired: Includi le scadenze già passate

    Returns:
        Lista di FleetAlert ordinata per days_left crescente (ordinamento
        stabile: a parità di giorni resta l'ordine veicolo/tipo)
    """
    today = today or datetime.date.today()
    horizon = settings.alert_horizon_days if horizon_days is None else horizon_days

    alerts = []
    for vehicle in vehicles:
        for kind, field_name in DEADLINE_FIELDS:
            deadline = getattr(vehicle, field_name)
            if deadline is None:
                continue

            days_left = (deadline - today).days
            if days_left > horizon:
                continue
            if days_left < 0 and not include_expired:
                continue

            alerts.append(
                FleetAlert(
                    vehicle_id=vehicle.id,
                    vehicle_label=vehicle.label,
                    plate=vehicle.plate,
                    deadline_kind=kind,
                    deadline_date=deadline,
                    days_left=days_left,
                )
            )

    alerts.sort(key=lambda a: a.days_left)

    logger.debug(f"Calcolati {len(alerts)} avvisi di scadenza (orizzonte {horizon} giorni)")

    return alerts
