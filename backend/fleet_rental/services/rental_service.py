"""
Service Layer per i Noleggi (registro noleggi e pagamenti)
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Contiene la logica del ciclo di vita del noleggio:
- Creazione con prenotazione del veicolo e dell'autista
- Registrazione pagamenti con ricalcolo di pagato/saldo
- Cambi di stato con sincronizzazione di veicolo e autista
- Eliminazione con liberazione delle risorse
"""

import datetime
import logging
import uuid
from decimal import Decimal
from typing import Optional

from fleet_rental.core.config import settings
from fleet_rental.core.exceptions import NotFoundError
from fleet_rental.core.state import AppState
from fleet_rental.models import Payment, Rental
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.rental import RENTAL_STATUS_LABELS, RentalCreate, RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


# Stato del veicolo imposto da ciascuno stato del noleggio
VEHICLE_STATUS_FOR_RENTAL: dict[RentalStatus, VehicleStatus] = {
    RentalStatus.RESERVED: VehicleStatus.RESERVED,
    RentalStatus.ACTIVE: VehicleStatus.RENTED,
    RentalStatus.COMPLETED: VehicleStatus.AVAILABLE,
}


class RentalService:
    """
    Service per la gestione dei noleggi.

    Invarianti mantenute da ogni metodo:
    - amount_paid == somma dei pagamenti
    - amount_paid + balance_due == price
    - veicolo e autista seguono lo stato del noleggio
    """

    # ------------------------------------------------------------
    # Lettura
    # ------------------------------------------------------------

    def get_all(
        self,
        state: AppState,
        status: Optional[RentalStatus] = None,
        vehicle_id: Optional[uuid.UUID] = None,
        client_id: Optional[uuid.UUID] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Rental], int]:
        """
        Recupera la lista paginata dei noleggi.

        Ordine: prima i noleggi non terminati, poi per data di inizio
        decrescente.

        Args:
            state: Stato applicativo
            status: Filtro per stato (opzionale)
            vehicle_id: Filtro per veicolo (opzionale)
            client_id: Filtro per cliente (opzionale)
            search: Ricerca sul nome del cliente (opzionale)
            page: Numero pagina
            per_page: Elementi per pagina

        Returns:
            Tuple di (lista noleggi, totale count)
        """
        rentals = list(state.rentals.values())

        if status is not None:
            rentals = [r for r in rentals if r.status == status]
        if vehicle_id is not None:
            rentals = [r for r in rentals if r.vehicle_id == vehicle_id]
        if client_id is not None:
            rentals = [r for r in rentals if r.client_id == client_id]
        if search:
            term = search.lower()
            rentals = [r for r in rentals if term in r.customer_name.lower()]

        rentals.sort(key=lambda r: r.start_date, reverse=True)
        rentals.sort(key=lambda r: r.status == RentalStatus.COMPLETED)

        total = len(rentals)
        offset = (page - 1) * per_page
        items = rentals[offset:offset + per_page]

        logger.debug(f"Recuperati {len(items)} noleggi su {total} totali")

        return items, total

    def get_by_id(self, state: AppState, rental_id: uuid.UUID) -> Rental:
        """
        Recupera un noleggio tramite ID.

        Raises:
            NotFoundError: Se il noleggio non esiste
        """
        rental = state.rentals.get(rental_id)

        if rental is None:
            logger.warning(f"Noleggio non trovato: {rental_id}")
            raise NotFoundError.for_entity("Location", rental_id)

        return rental

    # ------------------------------------------------------------
    # Comandi
    # ------------------------------------------------------------

    def create(self, state: AppState, data: RentalCreate) -> Rental:
        """
        Crea un nuovo noleggio in stato `reserved`.

        Il veicolo passa a `reserved`, l'eventuale autista diventa
        non disponibile.

        Raises:
            NotFoundError: Se veicolo, cliente, autista o partner non esistono
            BusinessValidationError: Se prezzo, date o disponibilità non sono validi
        """
        vehicle = state.vehicles.get(data.vehicle_id)
        if vehicle is None:
            raise NotFoundError.for_entity("Véhicule", data.vehicle_id)

        client = state.clients.get(data.client_id)
        if client is None:
            raise NotFoundError.for_entity("Client", data.client_id)

        driver = None
        if data.driver_id is not None:
            driver = state.drivers.get(data.driver_id)
            if driver is None:
                raise NotFoundError.for_entity("Chauffeur", data.driver_id)

        if data.affiliate_id is not None and data.affiliate_id not in state.affiliates:
            raise NotFoundError.for_entity("Partenaire", data.affiliate_id)

        validation.ensure_valid(
            validation.validate_rental(
                vehicle=vehicle,
                start_date=data.start_date,
                end_date=data.end_date,
                price=data.price,
                driver=driver,
            ),
            "Impossible de créer la location",
        )

        with state.transaction():
            rental = Rental(
                vehicle_id=vehicle.id,
                client_id=client.id,
                driver_id=data.driver_id,
                affiliate_id=data.affiliate_id,
                customer_name=client.name,
                start_date=data.start_date,
                end_date=data.end_date,
                price=data.price,
            )
            rental.recompute_balance()
            state.rentals[rental.id] = rental

            vehicle.status = VehicleStatus.RESERVED
            vehicle.touch()
            if driver is not None:
                driver.is_available = False
                driver.touch()

            history_service.log_action(
                state,
                HistoryEntity.RENTAL,
                rental.id,
                f"Location créée pour {rental.customer_name}.",
            )

        logger.info(
            f"Noleggio creato: {rental.id} - veicolo {vehicle.plate}, "
            f"cliente {rental.customer_name}, prezzo {rental.price}"
        )
        return rental

    def record_payment(
        self,
        state: AppState,
        rental_id: uuid.UUID,
        amount: Decimal,
        date: Optional[datetime.date] = None,
    ) -> Rental:
        """
        Registra un pagamento su un noleggio.

        Un pagamento rifiutato lascia il noleggio invariato.

        Raises:
            NotFoundError: Se il noleggio non esiste
            BusinessValidationError: Se amount <= 0 o amount > balance_due
        """
        rental = self.get_by_id(state, rental_id)

        validation.ensure_valid(
            validation.validate_payment(rental, amount),
            "Paiement refusé",
        )

        with state.transaction():
            payment = Payment(date=date or datetime.date.today(), amount=amount)
            rental.payments.append(payment)
            rental.recompute_balance()
            rental.touch()
            history_service.log_action(
                state,
                HistoryEntity.RENTAL,
                rental.id,
                f"Paiement de {amount} {settings.currency} ajouté.",
            )

        logger.info(
            f"Pagamento registrato su noleggio {rental_id}: {amount} "
            f"(saldo residuo {rental.balance_due})"
        )
        return rental

    def transition_status(
        self,
        state: AppState,
        rental_id: uuid.UUID,
        new_status: RentalStatus,
    ) -> Rental:
        """
        Cambia lo stato di un noleggio.

        Effetti collaterali:
        - active: veicolo `rented`
        - reserved: veicolo `reserved`
        - completed: veicolo `available`, autista di nuovo disponibile
        - uscita da completed: l'autista torna occupato

        In modalità strict (settings.strict_rental_transitions) sono
        ammesse solo le transizioni in avanti.

        Raises:
            NotFoundError: Se il noleggio non esiste
            BusinessValidationError: Se la transizione non è ammessa
        """
        rental = self.get_by_id(state, rental_id)
        old_status = rental.status

        validation.ensure_valid(
            validation.validate_rental_transition(
                old_status, new_status, strict=settings.strict_rental_transitions
            ),
            "Changement de statut refusé",
        )

        with state.transaction():
            rental.status = new_status
            rental.touch()

            vehicle = state.vehicles.get(rental.vehicle_id)
            if vehicle is not None:
                vehicle.status = VEHICLE_STATUS_FOR_RENTAL[new_status]
                vehicle.touch()

            driver = state.drivers.get(rental.driver_id) if rental.driver_id else None
            if driver is not None:
                if new_status == RentalStatus.COMPLETED:
                    driver.is_available = True
                    driver.touch()
                elif old_status == RentalStatus.COMPLETED:
                    driver.is_available = False
                    driver.touch()

            history_service.log_action(
                state,
                HistoryEntity.RENTAL,
                rental.id,
                f"Statut de location mis à jour à {RENTAL_STATUS_LABELS[new_status]}.",
            )

        logger.info(
            f"Stato noleggio {rental_id}: {old_status.value} -> {new_status.value}"
        )
        return rental

    def delete(self, state: AppState, rental_id: uuid.UUID) -> None:
        """
        Elimina un noleggio.

        Solo un noleggio non terminato libera veicolo e autista: un
        noleggio concluso non li trattiene più, e il veicolo può essere
        già impegnato da un contratto successivo.

        Raises:
            NotFoundError: Se il noleggio non esiste
        """
        rental = self.get_by_id(state, rental_id)
        is_open = rental.status != RentalStatus.COMPLETED

        with state.transaction():
            vehicle = state.vehicles.get(rental.vehicle_id)
            if vehicle is not None and is_open:
                vehicle.status = VehicleStatus.AVAILABLE
                vehicle.touch()

            if rental.driver_id is not None and is_open:
                driver = state.drivers.get(rental.driver_id)
                if driver is not None:
                    driver.is_available = True
                    driver.touch()

            del state.rentals[rental.id]
            history_service.log_action(
                state, HistoryEntity.RENTAL, rental.id, "Location supprimée."
            )

        logger.info(f"Noleggio eliminato: {rental_id}")


# Istanza globale del service
rental_service = RentalService()
