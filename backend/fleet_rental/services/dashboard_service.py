"""
Service Layer per Dashboard e Calendario
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Read-model di sola lettura costruiti dallo stato applicativo.
"""

import calendar
import datetime
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Optional

from fleet_rental.core.state import AppState
from fleet_rental.schemas.dashboard import (
    CalendarEvent,
    CalendarEventType,
    CalendarMonth,
    DashboardStats,
)
from fleet_rental.schemas.history import HistoryLogRead
from fleet_rental.schemas.rental import RentalRead, RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services.alert_service import compute_alerts

# Logger per questo modulo
logger = logging.getLogger(__name__)

DASHBOARD_ACTIVE_RENTALS = 5
DASHBOARD_HISTORY_ENTRIES = 10

CALENDAR_TYPE_FOR_RENTAL: dict[RentalStatus, CalendarEventType] = {
    RentalStatus.RESERVED: CalendarEventType.RESERVATION,
    RentalStatus.ACTIVE: CalendarEventType.RENTAL,
    RentalStatus.COMPLETED: CalendarEventType.COMPLETED,
}

# Etichette brevi delle scadenze nel calendario
CALENDAR_DEADLINES: tuple[tuple[str, str], ...] = (
    ("insurance_expiry", "Assurance"),
    ("technical_inspection_expiry", "Visite Tech."),
    ("next_maintenance", "Maintenance Prév."),
)


class DashboardService:
    """Service per gli indicatori della dashboard e il calendario mensile."""

    def get_stats(
        self,
        state: AppState,
        today: Optional[datetime.date] = None,
    ) -> DashboardStats:
        """
        Indicatori sintetici della flotta.

        Il ricavo totale è la somma dei prezzi dei noleggi terminati.
        """
        vehicles = list(state.vehicles.values())
        rentals = list(state.rentals.values())

        total_revenue = sum(
            (r.price for r in rentals if r.status == RentalStatus.COMPLETED),
            Decimal("0"),
        )
        open_rentals = [r for r in rentals if r.status != RentalStatus.COMPLETED]

        return DashboardStats(
            total_vehicles=len(vehicles),
            available_vehicles=sum(1 for v in vehicles if v.status == VehicleStatus.AVAILABLE),
            rented_vehicles=sum(1 for v in vehicles if v.status == VehicleStatus.RENTED),
            total_clients=len(state.clients),
            available_drivers=sum(1 for d in state.drivers.values() if d.is_available),
            total_revenue=total_revenue,
            alert_count=len(compute_alerts(vehicles, today=today)),
            active_rentals=[
                RentalRead.model_validate(r) for r in open_rentals[:DASHBOARD_ACTIVE_RENTALS]
            ],
            recent_history=[
                HistoryLogRead.model_validate(h)
                for h in state.history[:DASHBOARD_HISTORY_ENTRIES]
            ],
        )

    def get_calendar(self, state: AppState, year: int, month: int) -> CalendarMonth:
        """
        Eventi del mese raggruppati per data ISO.

        - Ogni giorno di noleggio (inizio e fine inclusi), con tipo
          derivato dallo stato e flag di pagamento
        - Le manutenzioni alla loro data
        - Le scadenze dei veicoli alla loro data
        """
        first_day = datetime.date(year, month, 1)
        last_day = datetime.date(year, month, calendar.monthrange(year, month)[1])

        events: dict[datetime.date, list[CalendarEvent]] = defaultdict(list)

        def model_of(vehicle_id) -> str:
            vehicle = state.vehicles.get(vehicle_id)
            return vehicle.model if vehicle is not None else ""

        for rental in state.rentals.values():
            start = max(rental.start_date, first_day)
            end = min(rental.end_date, last_day)
            day = start
            while day <= end:
                events[day].append(
                    CalendarEvent(
                        date=day,
                        title=f"{rental.customer_name} - {model_of(rental.vehicle_id)}",
                        type=CALENDAR_TYPE_FOR_RENTAL[rental.status],
                        is_paid=rental.is_paid,
                    )
                )
                day += datetime.timedelta(days=1)

        for record in state.maintenance_records.values():
            if first_day <= record.date <= last_day:
                events[record.date].append(
                    CalendarEvent(
                        date=record.date,
                        title=f"Maintenance {model_of(record.vehicle_id)}",
                        type=CalendarEventType.MAINTENANCE,
                    )
                )

        for vehicle in state.vehicles.values():
            for field_name, label in CALENDAR_DEADLINES:
                deadline = getattr(vehicle, field_name)
                if deadline is not None and first_day <= deadline <= last_day:
                    events[deadline].append(
                        CalendarEvent(
                            date=deadline,
                            title=f"{label} {vehicle.model}",
                            type=CalendarEventType.DEADLINE,
                        )
                    )

        logger.debug(f"Calendario {year}-{month:02d}: {len(events)} giorni con eventi")

        return CalendarMonth(
            year=year,
            month=month,
            events={day.isoformat(): events[day] for day in sorted(events)},
        )


# Istanza globale del service
dashboard_service = DashboardService()
