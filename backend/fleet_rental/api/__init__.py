"""
API Routes
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Modulo per l'aggregazione dei router versionati.
"""

from fleet_rental.api.v1 import api_v1_router

# Esportazione router
__all__ = ["api_v1_router"]
