"""
Service Layer per l'entità Client
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce la logica di business per la gestione dei clienti.
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.exceptions import NotFoundError, ResourceInUseError
from fleet_rental.core.state import AppState
from fleet_rental.models import Client
from fleet_rental.schemas.client import (
    ClientCreate,
    ClientDetail,
    ClientRead,
    ClientUpdate,
)
from fleet_rental.schemas.history import HistoryEntity, HistoryLogRead
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.services import validation
from fleet_rental.services.accounting_service import accounting_service
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


class ClientService:
    """
    Service per la gestione delle operazioni CRUD sui clienti.
    """

    def get_all(
        self,
        state: AppState,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Client], int]:
        """
        Recupera la lista paginata dei clienti, in ordine alfabetico.

        Args:
            state: Stato applicativo
            search: Ricerca su nome, telefono, email e patente (opzionale)
            page: Numero pagina
            per_page: Elementi per pagina

        Returns:
            Tuple di (lista clienti, totale count)
        """
        clients = list(state.clients.values())

        if search:
            term = search.lower()
            clients = [
                c for c in clients
                if term in c.name.lower()
                or term in c.phone.lower()
                or term in c.email.lower()
                or term in c.license_number.lower()
            ]

        clients.sort(key=lambda c: c.name.lower())

        total = len(clients)
        offset = (page - 1) * per_page
        items = clients[offset:offset + per_page]

        logger.debug(f"Recuperati {len(items)} clienti su {total} totali")

        return items, total

    def get_by_id(self, state: AppState, client_id: uuid.UUID) -> Client:
        """
        Recupera un cliente tramite ID.

        Raises:
            NotFoundError: Se il cliente non esiste
        """
        client = state.clients.get(client_id)

        if client is None:
            logger.warning(f"Cliente non trovato: {client_id}")
            raise NotFoundError.for_entity("Client", client_id)

        return client

    def get_detail(self, state: AppState, client_id: uuid.UUID) -> ClientDetail:
        """
        Dettaglio cliente con indicatori di fedeltà e storico.

        Raises:
            NotFoundError: Se il cliente non esiste
        """
        client = self.get_by_id(state, client_id)
        loyalty = accounting_service.client_loyalty(state, client.id)
        history = history_service.get_all(
            state, entity=HistoryEntity.CLIENT, entity_id=client.id
        )

        return ClientDetail(
            **ClientRead.model_validate(client).model_dump(),
            loyalty=loyalty,
            history=[HistoryLogRead.model_validate(h) for h in history],
        )

    def create(self, state: AppState, data: ClientCreate) -> Client:
        """
        Crea un nuovo cliente.

        Raises:
            BusinessValidationError: Se i campi obbligatori mancano o il formato non è valido
        """
        validation.ensure_valid(
            validation.validate_client(
                data.name, data.phone, data.email, data.license_number
            ),
            "Données du client invalides",
        )

        with state.transaction():
            client = Client(**data.model_dump())
            state.clients[client.id] = client
            history_service.log_action(
                state, HistoryEntity.CLIENT, client.id, f"Client {client.name} ajouté."
            )

        logger.info(f"Cliente creato: {client.id} - {client.name}")
        return client

    def update(
        self,
        state: AppState,
        client_id: uuid.UUID,
        data: ClientUpdate,
    ) -> Client:
        """
        Modifica parzialmente un cliente.

        Il nome denormalizzato sui noleggi già creati non viene toccato.

        Raises:
            NotFoundError: Se il cliente non esiste
            BusinessValidationError: Se i nuovi valori non sono validi
        """
        client = self.get_by_id(state, client_id)
        updated = client.model_copy(update=data.model_dump(exclude_unset=True, exclude_none=True))

        validation.ensure_valid(
            validation.validate_client(
                updated.name, updated.phone, updated.email, updated.license_number
            ),
            "Données du client invalides",
        )

        with state.transaction():
            updated.touch()
            state.clients[client.id] = updated
            history_service.log_action(
                state, HistoryEntity.CLIENT, client.id, f"Client {updated.name} modifié."
            )

        logger.info(f"Cliente aggiornato: {client_id}")
        return updated

    def delete(self, state: AppState, client_id: uuid.UUID) -> None:
        """
        Elimina un cliente.

        Raises:
            NotFoundError: Se il cliente non esiste
            ResourceInUseError: Se il cliente ha noleggi non terminati
        """
        client = self.get_by_id(state, client_id)

        open_rentals = [
            r for r in state.rentals.values()
            if r.client_id == client.id and r.status != RentalStatus.COMPLETED
        ]
        if open_rentals:
            logger.warning(f"Eliminazione cliente {client_id} rifiutata: noleggi in corso")
            raise ResourceInUseError(
                "Impossible de supprimer un client avec des locations en cours",
                "rental_ids",
                (r.id for r in open_rentals),
            )

        with state.transaction():
            del state.clients[client.id]
            history_service.log_action(
                state, HistoryEntity.CLIENT, client.id, "Client supprimé."
            )

        logger.info(f"Cliente eliminato: {client_id}")


# Istanza globale del service
client_service = ClientService()
