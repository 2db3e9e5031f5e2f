"""
Modelli di dominio
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Le entità sono modelli Pydantic conservati nello stato applicativo
(vedi fleet_rental.core.state).
"""

from fleet_rental.models.event import (
    Accident,
    Contravention,
    Expense,
    HistoryLog,
    MaintenanceRecord,
)
from fleet_rental.models.party import Affiliate, Client, Driver, Owner
from fleet_rental.models.rental import Payment, Rental
from fleet_rental.models.vehicle import Vehicle

__all__ = [
    "Accident",
    "Affiliate",
    "Client",
    "Contravention",
    "Driver",
    "Expense",
    "HistoryLog",
    "MaintenanceRecord",
    "Owner",
    "Payment",
    "Rental",
    "Vehicle",
]
