"""
Service Layer per le Contravvenzioni
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.exceptions import NotFoundError
from fleet_rental.core.state import AppState
from fleet_rental.models import Contravention
from fleet_rental.schemas.contravention import (
    CONTRAVENTION_STATUS_LABELS,
    ContraventionCreate,
    ContraventionStatus,
)
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


class ContraventionService:
    """
    Service per le contravvenzioni stradali.

    Gli importi entrano negli indicatori finanziari del veicolo
    (vedi FleetReportService), non nel registro contabile.
    """

    def get_all(
        self,
        state: AppState,
        vehicle_id: Optional[uuid.UUID] = None,
        rental_id: Optional[uuid.UUID] = None,
        status: Optional[ContraventionStatus] = None,
    ) -> list[Contravention]:
        """Lista contravvenzioni filtrate, dalla più recente."""
        items = [
            c for c in state.contraventions.values()
            if (vehicle_id is None or c.vehicle_id == vehicle_id)
            and (rental_id is None or c.rental_id == rental_id)
            and (status is None or c.status == status)
        ]
        items.sort(key=lambda c: c.date, reverse=True)
        return items

    def get_by_id(self, state: AppState, contravention_id: uuid.UUID) -> Contravention:
        contravention = state.contraventions.get(contravention_id)

        if contravention is None:
            logger.warning(f"Contravvenzione non trovata: {contravention_id}")
            raise NotFoundError.for_entity("Contravention", contravention_id)

        return contravention

    def create(self, state: AppState, data: ContraventionCreate) -> Contravention:
        """
        Registra una contravvenzione.

        Raises:
            NotFoundError: Se il veicolo o il noleggio indicato non esistono
            BusinessValidationError: Se importo o descrizione non sono validi
        """
        if data.vehicle_id not in state.vehicles:
            raise NotFoundError.for_entity("Véhicule", data.vehicle_id)
        if data.rental_id is not None and data.rental_id not in state.rentals:
            raise NotFoundError.for_entity("Location", data.rental_id)

        validation.ensure_valid(
            validation.validate_contravention(data.description, data.amount),
            "Données de la contravention invalides",
        )

        with state.transaction():
            contravention = Contravention(**data.model_dump())
            state.contraventions[contravention.id] = contravention
            history_service.log_action(
                state,
                HistoryEntity.CONTRAVENTION,
                contravention.id,
                "Contravention ajoutée.",
            )

        logger.info(
            f"Contravvenzione registrata: {contravention.id} - "
            f"veicolo {contravention.vehicle_id}, importo {contravention.amount}"
        )
        return contravention

    def update_status(
        self,
        state: AppState,
        contravention_id: uuid.UUID,
        status: ContraventionStatus,
    ) -> Contravention:
        contravention = self.get_by_id(state, contravention_id)

        with state.transaction():
            contravention.status = status
            contravention.touch()
            history_service.log_action(
                state,
                HistoryEntity.CONTRAVENTION,
                contravention.id,
                f"Statut de contravention mis à jour à {CONTRAVENTION_STATUS_LABELS[status]}.",
            )

        logger.info(f"Stato contravvenzione {contravention_id} -> {status.value}")
        return contravention

    def delete(self, state: AppState, contravention_id: uuid.UUID) -> None:
        contravention = self.get_by_id(state, contravention_id)

        with state.transaction():
            del state.contraventions[contravention.id]
            history_service.log_action(
                state,
                HistoryEntity.CONTRAVENTION,
                contravention.id,
                "Contravention supprimée.",
            )

        logger.info(f"Contravvenzione eliminata: {contravention_id}")


# Istanza globale del service
contravention_service = ContraventionService()
