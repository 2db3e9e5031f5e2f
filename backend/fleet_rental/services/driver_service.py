"""
Service Layer per gli Autisti
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.exceptions import NotFoundError, ResourceInUseError
from fleet_rental.core.state import AppState
from fleet_rental.models import Driver
from fleet_rental.schemas.driver import DriverCreate
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


class DriverService:
    """
    Service per la gestione degli autisti.

    La disponibilità è gestita soprattutto dal ciclo di vita del
    noleggio (vedi RentalService); set_availability permette la
    correzione manuale.
    """

    def get_all(
        self,
        state: AppState,
        is_available: Optional[bool] = None,
    ) -> list[Driver]:
        """Lista autisti in ordine alfabetico, filtrabile per disponibilità."""
        drivers = [
            d for d in state.drivers.values()
            if is_available is None or d.is_available == is_available
        ]
        drivers.sort(key=lambda d: d.name.lower())
        return drivers

    def get_by_id(self, state: AppState, driver_id: uuid.UUID) -> Driver:
        """
        Recupera un autista tramite ID.

        Raises:
            NotFoundError: Se l'autista non esiste
        """
        driver = state.drivers.get(driver_id)

        if driver is None:
            logger.warning(f"Autista non trovato: {driver_id}")
            raise NotFoundError.for_entity("Chauffeur", driver_id)

        return driver

    def create(self, state: AppState, data: DriverCreate) -> Driver:
        """Crea un autista, disponibile per default."""
        validation.ensure_valid(
            validation.validate_driver(data.name, data.phone, data.license_number),
            "Données du chauffeur invalides",
        )

        with state.transaction():
            driver = Driver(**data.model_dump())
            state.drivers[driver.id] = driver
            history_service.log_action(
                state, HistoryEntity.DRIVER, driver.id, f"Chauffeur {driver.name} ajouté."
            )

        logger.info(f"Autista creato: {driver.id} - {driver.name}")
        return driver

    def set_availability(
        self,
        state: AppState,
        driver_id: uuid.UUID,
        is_available: bool,
    ) -> Driver:
        driver = self.get_by_id(state, driver_id)

        with state.transaction():
            driver.is_available = is_available
            driver.touch()
            history_service.log_action(
                state,
                HistoryEntity.DRIVER,
                driver.id,
                "Disponibilité du chauffeur mise à jour.",
            )

        logger.info(f"Disponibilità autista {driver_id}: {is_available}")
        return driver

    def delete(self, state: AppState, driver_id: uuid.UUID) -> None:
        """
        Elimina un autista.

        Raises:
            NotFoundError: Se l'autista non esiste
            ResourceInUseError: Se l'autista è assegnato a un noleggio non terminato
        """
        driver = self.get_by_id(state, driver_id)

        open_rentals = [
            r for r in state.rentals.values()
            if r.driver_id == driver.id and r.status != RentalStatus.COMPLETED
        ]
        if open_rentals:
            logger.warning(f"Eliminazione autista {driver_id} rifiutata: noleggio in corso")
            raise ResourceInUseError(
                "Impossible de supprimer un chauffeur affecté à une location en cours",
                "rental_ids",
                (r.id for r in open_rentals),
            )

        with state.transaction():
            del state.drivers[driver.id]
            history_service.log_action(
                state, HistoryEntity.DRIVER, driver.id, "Chauffeur supprimé."
            )

        logger.info(f"Autista eliminato: {driver_id}")


# Istanza globale del service
driver_service = DriverService()
