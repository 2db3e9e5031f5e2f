"""
Service Layer per l'entità Vehicle
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce la logica di business per la gestione dei veicoli.
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.exceptions import DuplicateError, NotFoundError, ResourceInUseError
from fleet_rental.core.state import AppState
from fleet_rental.models import Vehicle
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.schemas.vehicle import (
    VEHICLE_STATUS_LABELS,
    VehicleCreate,
    VehicleStatus,
    VehicleUpdate,
)
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Campi del veicolo che ammettono None
NULLABLE_FIELDS = frozenset({
    "insurance_expiry",
    "technical_inspection_expiry",
    "next_maintenance",
    "image_url",
    "insurance_document_url",
    "technical_inspection_document_url",
    "registration_document_url",
})


class VehicleService:
    """
    Service per la gestione delle operazioni CRUD sui veicoli.

    Lavora sullo stato applicativo passato come primo argomento,
    senza dipendenze da FastAPI.
    """

    def get_all(
        self,
        state: AppState,
        status: Optional[VehicleStatus] = None,
        owner_id: Optional[uuid.UUID] = None,
        year: Optional[int] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Vehicle], int]:
        """
        Recupera la lista paginata dei veicoli.

        Args:
            state: Stato applicativo
            status: Filtro per stato (opzionale)
            owner_id: Filtro per proprietario (opzionale)
            year: Filtro per anno del modello (opzionale)
            search: Ricerca su marca, modello e targa; ogni parola deve
                comparire (es. "toyota AA-123")
            page: Numero pagina (default 1)
            per_page: Elementi per pagina (default 50)

        Returns:
            Tuple di (lista veicoli, totale count)
        """
        vehicles = list(state.vehicles.values())

        if status is not None:
            vehicles = [v for v in vehicles if v.status == status]

        if owner_id is not None:
            vehicles = [v for v in vehicles if v.owner_id == owner_id]

        if year is not None:
            vehicles = [v for v in vehicles if v.year == year]

        if search:
            terms = search.lower().split()
            vehicles = [
                v for v in vehicles
                if all(t in f"{v.make} {v.model} {v.plate}".lower() for t in terms)
            ]

        # Ordine per targa ASC
        vehicles.sort(key=lambda v: v.plate)

        total = len(vehicles)
        offset = (page - 1) * per_page
        items = vehicles[offset:offset + per_page]

        logger.debug(f"Recuperati {len(items)} veicoli su {total} totali")

        return items, total

    def get_by_id(self, state: AppState, vehicle_id: uuid.UUID) -> Vehicle:
        """
        Recupera un veicolo tramite ID.

        Raises:
            NotFoundError: Se il veicolo non esiste
        """
        vehicle = state.vehicles.get(vehicle_id)

        if vehicle is None:
            logger.warning(f"Veicolo non trovato: {vehicle_id}")
            raise NotFoundError.for_entity("Véhicule", vehicle_id)

        return vehicle

    def _check_plate_unique(
        self,
        state: AppState,
        plate: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        for other in state.vehicles.values():
            if other.plate == plate and other.id != exclude_id:
                logger.warning(f"Targa duplicata: {plate}")
                raise DuplicateError(
                    f"Un véhicule avec la plaque {plate} existe déjà",
                    extra={"vehicle_id": str(other.id)},
                )

    def _check_owner(self, state: AppState, owner_id: uuid.UUID) -> None:
        if owner_id not in state.owners:
            logger.warning(f"Proprietario non trovato: {owner_id}")
            raise NotFoundError.for_entity("Propriétaire", owner_id)

    def create(self, state: AppState, data: VehicleCreate) -> Vehicle:
        """
        Registra un nuovo veicolo.

        Raises:
            NotFoundError: Se il proprietario non esiste
            DuplicateError: Se la targa è già registrata
            BusinessValidationError: Se le date o il valore non sono validi
        """
        with state.transaction():
            self._check_owner(state, data.owner_id)
            self._check_plate_unique(state, data.plate)
            validation.ensure_valid(
                validation.validate_vehicle(
                    purchase_value=data.purchase_value,
                    purchase_date=data.purchase_date,
                    insurance_expiry=data.insurance_expiry,
                    technical_inspection_expiry=data.technical_inspection_expiry,
                    next_maintenance=data.next_maintenance,
                ),
                "Données du véhicule invalides",
            )

            vehicle = Vehicle(**data.model_dump())
            state.vehicles[vehicle.id] = vehicle
            history_service.log_action(
                state,
                HistoryEntity.VEHICLE,
                vehicle.id,
                f"Véhicule {vehicle.make} {vehicle.model} ajouté.",
            )

        logger.info(f"Veicolo creato: {vehicle.id} - {vehicle.plate}")
        return vehicle

    def update(
        self,
        state: AppState,
        vehicle_id: uuid.UUID,
        data: VehicleUpdate,
    ) -> Vehicle:
        """
        Aggiorna parzialmente un veicolo.

        Le scadenze vengono controllate solo se modificate.

        Raises:
            NotFoundError: Se il veicolo o il nuovo proprietario non esistono
            DuplicateError: Se la nuova targa è già registrata
            BusinessValidationError: Se i nuovi valori non sono validi
        """
        vehicle = self.get_by_id(state, vehicle_id)
        # I campi opzionali (scadenze, documenti) possono essere azzerati con null
        update_data = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }

        with state.transaction():
            if "owner_id" in update_data:
                self._check_owner(state, update_data["owner_id"])
            if "plate" in update_data and update_data["plate"] != vehicle.plate:
                self._check_plate_unique(state, update_data["plate"], exclude_id=vehicle.id)

            validation.ensure_valid(
                validation.validate_vehicle(
                    purchase_value=update_data.get("purchase_value", vehicle.purchase_value),
                    purchase_date=update_data.get("purchase_date", vehicle.purchase_date),
                    insurance_expiry=update_data.get("insurance_expiry"),
                    technical_inspection_expiry=update_data.get("technical_inspection_expiry"),
                    next_maintenance=update_data.get("next_maintenance"),
                ),
                "Données du véhicule invalides",
            )

            updated = vehicle.model_copy(update=update_data)
            updated.touch()
            state.vehicles[vehicle.id] = updated
            history_service.log_action(
                state,
                HistoryEntity.VEHICLE,
                vehicle.id,
                f"Véhicule {updated.make} {updated.model} modifié.",
            )

        logger.info(f"Veicolo aggiornato: {vehicle_id}")
        return updated

    def update_status(
        self,
        state: AppState,
        vehicle_id: uuid.UUID,
        status: VehicleStatus,
    ) -> Vehicle:
        """Cambio di stato manuale (es. messa in manutenzione)."""
        vehicle = self.get_by_id(state, vehicle_id)

        with state.transaction():
            vehicle.status = status
            vehicle.touch()
            history_service.log_action(
                state,
                HistoryEntity.VEHICLE,
                vehicle.id,
                f"Statut mis à jour à {VEHICLE_STATUS_LABELS[status]}.",
            )

        logger.info(f"Stato veicolo {vehicle_id} -> {status.value}")
        return vehicle

    def delete(self, state: AppState, vehicle_id: uuid.UUID) -> None:
        """
        Elimina un veicolo.

        Raises:
            NotFoundError: Se il veicolo non esiste
            ResourceInUseError: Se il veicolo ha noleggi non terminati
        """
        vehicle = self.get_by_id(state, vehicle_id)

        open_rentals = [
            r for r in state.rentals.values()
            if r.vehicle_id == vehicle.id and r.status != RentalStatus.COMPLETED
        ]
        if open_rentals:
            logger.warning(f"Eliminazione veicolo {vehicle_id} rifiutata: noleggi in corso")
            raise ResourceInUseError(
                "Impossible de supprimer un véhicule avec des locations en cours",
                "rental_ids",
                (r.id for r in open_rentals),
            )

        with state.transaction():
            del state.vehicles[vehicle.id]
            history_service.log_action(
                state, HistoryEntity.VEHICLE, vehicle.id, "Véhicule supprimé."
            )

        logger.info(f"Veicolo eliminato: {vehicle_id}")


# Istanza globale del service
vehicle_service = VehicleService()
