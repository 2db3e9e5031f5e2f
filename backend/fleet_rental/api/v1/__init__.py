"""
API v1 Routes
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Router versione 1 dell'API.
"""

from fastapi import APIRouter

from fleet_rental.api.v1 import (
    accounting, clients, commands, contraventions, dashboard, drivers, expenses, maintenance, partners, rentals, vehicles
)

# Router aggregato per v1
api_v1_router = APIRouter(prefix="/api/v1")

# Includi i router dei moduli
api_v1_router.include_router(vehicles.router)
api_v1_router.include_router(rentals.router)
api_v1_router.include_router(clients.router)
api_v1_router.include_router(drivers.router)
api_v1_router.include_router(partners.owners_router)
api_v1_router.include_router(partners.affiliates_router)
api_v1_router.include_router(maintenance.router)
api_v1_router.include_router(maintenance.accidents_router)
api_v1_router.include_router(contraventions.router)
api_v1_router.include_router(expenses.router)
api_v1_router.include_router(accounting.router)
api_v1_router.include_router(dashboard.router)
api_v1_router.include_router(dashboard.alerts_router)
api_v1_router.include_router(dashboard.history_router)
api_v1_router.include_router(commands.router)

# Esportazione
__all__ = ["api_v1_router"]
