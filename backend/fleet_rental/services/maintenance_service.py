"""
Service Layer per Manutenzioni e Sinistri
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene:
- MaintenanceService: pianificazione e avanzamento degli interventi
- AccidentService: dichiarazione e gestione delle pratiche di sinistro

Solo le manutenzioni completate entrano nel registro contabile
(vedi AccountingService).
"""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from fleet_rental.core.exceptions import NotFoundError
from fleet_rental.core.state import AppState
from fleet_rental.models import Accident, MaintenanceRecord
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.maintenance import (
    ACCIDENT_STATUS_LABELS,
    MAINTENANCE_STATUS_LABELS,
    AccidentCreate,
    AccidentStatus,
    MaintenanceCreate,
    MaintenanceStatus,
)
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


def _check_vehicle(state: AppState, vehicle_id: uuid.UUID) -> None:
    if vehicle_id not in state.vehicles:
        logger.warning(f"Veicolo non trovato: {vehicle_id}")
        raise NotFoundError.for_entity("Véhicule", vehicle_id)


def _check_rental(state: AppState, rental_id: Optional[uuid.UUID]) -> None:
    if rental_id is not None and rental_id not in state.rentals:
        logger.warning(f"Noleggio non trovato: {rental_id}")
        raise NotFoundError.for_entity("Location", rental_id)


# -------------------------------------------------------------------
# Manutenzioni
# -------------------------------------------------------------------

class MaintenanceService:
    """Service per gli interventi di manutenzione."""

    def get_all(
        self,
        state: AppState,
        vehicle_id: Optional[uuid.UUID] = None,
        status: Optional[MaintenanceStatus] = None,
    ) -> list[MaintenanceRecord]:
        """Lista manutenzioni filtrate, dalla più recente."""
        records = [
            m for m in state.maintenance_records.values()
            if (vehicle_id is None or m.vehicle_id == vehicle_id)
            and (status is None or m.status == status)
        ]
        records.sort(key=lambda m: m.date, reverse=True)
        return records

    def get_by_id(self, state: AppState, record_id: uuid.UUID) -> MaintenanceRecord:
        record = state.maintenance_records.get(record_id)

        if record is None:
            logger.warning(f"Manutenzione non trovata: {record_id}")
            raise NotFoundError.for_entity("Maintenance", record_id)

        return record

    def create(self, state: AppState, data: MaintenanceCreate) -> MaintenanceRecord:
        """
        Pianifica un intervento su un veicolo.

        Raises:
            NotFoundError: Se il veicolo non esiste
            BusinessValidationError: Se descrizione o costo non sono validi
        """
        _check_vehicle(state, data.vehicle_id)
        validation.ensure_valid(
            validation.validate_maintenance(data.description, data.cost),
            "Données de maintenance invalides",
        )

        with state.transaction():
            record = MaintenanceRecord(**data.model_dump())
            state.maintenance_records[record.id] = record
            history_service.log_action(
                state,
                HistoryEntity.MAINTENANCE,
                record.id,
                "Maintenance planifiée pour le véhicule.",
            )

        logger.info(f"Manutenzione creata: {record.id} - veicolo {record.vehicle_id}")
        return record

    def update_status(
        self,
        state: AppState,
        record_id: uuid.UUID,
        status: MaintenanceStatus,
    ) -> MaintenanceRecord:
        record = self.get_by_id(state, record_id)

        with state.transaction():
            record.status = status
            record.touch()
            history_service.log_action(
                state,
                HistoryEntity.MAINTENANCE,
                record.id,
                f"Statut de maintenance mis à jour à {MAINTENANCE_STATUS_LABELS[status]}.",
            )

        logger.info(f"Stato manutenzione {record_id} -> {status.value}")
        return record

    def delete(self, state: AppState, record_id: uuid.UUID) -> None:
        record = self.get_by_id(state, record_id)

        with state.transaction():
            del state.maintenance_records[record.id]
            history_service.log_action(
                state,
                HistoryEntity.MAINTENANCE,
                record.id,
                "Tâche de maintenance supprimée.",
            )

        logger.info(f"Manutenzione eliminata: {record_id}")


# -------------------------------------------------------------------
# Sinistri
# -------------------------------------------------------------------

class AccidentService:
    """Service per le pratiche di sinistro."""

    def get_all(
        self,
        state: AppState,
        vehicle_id: Optional[uuid.UUID] = None,
        status: Optional[AccidentStatus] = None,
    ) -> list[Accident]:
        """Lista sinistri filtrati, dal più recente."""
        accidents = [
            a for a in state.accidents.values()
            if (vehicle_id is None or a.vehicle_id == vehicle_id)
            and (status is None or a.status == status)
        ]
        accidents.sort(key=lambda a: a.date, reverse=True)
        return accidents

    def get_by_id(self, state: AppState, accident_id: uuid.UUID) -> Accident:
        accident = state.accidents.get(accident_id)

        if accident is None:
            logger.warning(f"Sinistro non trovato: {accident_id}")
            raise NotFoundError.for_entity("Accident", accident_id)

        return accident

    def create(self, state: AppState, data: AccidentCreate) -> Accident:
        """
        Dichiara un sinistro (stato iniziale: pending).

        Raises:
            NotFoundError: Se il veicolo o il noleggio indicato non esistono
            BusinessValidationError: Se descrizione o costi non sono validi
        """
        _check_vehicle(state, data.vehicle_id)
        _check_rental(state, data.rental_id)
        validation.ensure_valid(
            validation.validate_accident(
                data.description, data.estimated_cost, data.final_cost
            ),
            "Données de l'accident invalides",
        )

        with state.transaction():
            accident = Accident(**data.model_dump(), status=AccidentStatus.PENDING)
            state.accidents[accident.id] = accident
            history_service.log_action(
                state,
                HistoryEntity.ACCIDENT,
                accident.id,
                "Accident déclaré pour le véhicule.",
            )

        logger.info(f"Sinistro dichiarato: {accident.id} - veicolo {accident.vehicle_id}")
        return accident

    def update_status(
        self,
        state: AppState,
        accident_id: uuid.UUID,
        status: AccidentStatus,
        final_cost: Optional[Decimal] = None,
    ) -> Accident:
        """Aggiorna lo stato della pratica ed eventualmente il costo finale."""
        accident = self.get_by_id(state, accident_id)

        with state.transaction():
            accident.status = status
            if final_cost is not None:
                accident.final_cost = final_cost
            accident.touch()
            history_service.log_action(
                state,
                HistoryEntity.ACCIDENT,
                accident.id,
                f"Statut de l'accident mis à jour à {ACCIDENT_STATUS_LABELS[status]}.",
            )

        logger.info(f"Stato sinistro {accident_id} -> {status.value}")
        return accident

    def delete(self, state: AppState, accident_id: uuid.UUID) -> None:
        accident = self.get_by_id(state, accident_id)

        with state.transaction():
            del state.accidents[accident.id]
            history_service.log_action(
                state,
                HistoryEntity.ACCIDENT,
                accident.id,
                "Dossier d'accident supprimé.",
            )

        logger.info(f"Sinistro eliminato: {accident_id}")


# Istanze globali dei service
maintenance_service = MaintenanceService()
accident_service = AccidentService()
