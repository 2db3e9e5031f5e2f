"""
Service Layer per Proprietari e Partner (affiliati)
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid

from fleet_rental.core.exceptions import NotFoundError, ResourceInUseError
from fleet_rental.core.state import AppState
from fleet_rental.models import Affiliate, Owner
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.partner import AffiliateCreate, OwnerCreate
from fleet_rental.services import validation
from fleet_rental.services.history_service import history_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


class OwnerService:
    """Service per i proprietari dei veicoli."""

    def get_all(self, state: AppState) -> list[Owner]:
        owners = list(state.owners.values())
        owners.sort(key=lambda o: o.name.lower())
        return owners

    def get_by_id(self, state: AppState, owner_id: uuid.UUID) -> Owner:
        """
        Recupera un proprietario tramite ID.

        Raises:
            NotFoundError: Se il proprietario non esiste
        """
        owner = state.owners.get(owner_id)

        if owner is None:
            logger.warning(f"Proprietario non trovato: {owner_id}")
            raise NotFoundError.for_entity("Propriétaire", owner_id)

        return owner

    def create(self, state: AppState, data: OwnerCreate) -> Owner:
        validation.ensure_valid(
            validation.validate_owner(data.name, data.phone, data.email),
            "Données du propriétaire invalides",
        )

        with state.transaction():
            owner = Owner(**data.model_dump())
            state.owners[owner.id] = owner
            history_service.log_action(
                state, HistoryEntity.OWNER, owner.id, f"Propriétaire {owner.name} ajouté."
            )

        logger.info(f"Proprietario creato: {owner.id} - {owner.name}")
        return owner

    def delete(self, state: AppState, owner_id: uuid.UUID) -> None:
        """
        Elimina un proprietario.

        Raises:
            NotFoundError: Se il proprietario non esiste
            ResourceInUseError: Se ci sono veicoli che lo referenziano
        """
        owner = self.get_by_id(state, owner_id)

        vehicle_ids = [v.id for v in state.vehicles.values() if v.owner_id == owner.id]
        if vehicle_ids:
            logger.warning(f"Eliminazione proprietario {owner_id} rifiutata: veicoli collegati")
            raise ResourceInUseError(
                "Impossible de supprimer un propriétaire qui possède des véhicules",
                "vehicle_ids",
                vehicle_ids,
            )

        with state.transaction():
            del state.owners[owner.id]
            history_service.log_action(
                state, HistoryEntity.OWNER, owner.id, "Propriétaire supprimé."
            )

        logger.info(f"Proprietario eliminato: {owner_id}")


class AffiliateService:
    """
    Service per i partner commerciali.

    L'eliminazione non tocca i noleggi già procurati: affiliate_id
    resta sul noleggio come riferimento storico.
    """

    def get_all(self, state: AppState) -> list[Affiliate]:
        affiliates = list(state.affiliates.values())
        affiliates.sort(key=lambda a: a.name.lower())
        return affiliates

    def get_by_id(self, state: AppState, affiliate_id: uuid.UUID) -> Affiliate:
        affiliate = state.affiliates.get(affiliate_id)

        if affiliate is None:
            logger.warning(f"Partner non trovato: {affiliate_id}")
            raise NotFoundError.for_entity("Partenaire", affiliate_id)

        return affiliate

    def create(self, state: AppState, data: AffiliateCreate) -> Affiliate:
        validation.ensure_valid(
            validation.validate_affiliate(data.name, data.commission_rate),
            "Données du partenaire invalides",
        )

        with state.transaction():
            affiliate = Affiliate(**data.model_dump())
            state.affiliates[affiliate.id] = affiliate
            history_service.log_action(
                state,
                HistoryEntity.AFFILIATE,
                affiliate.id,
                f"Partenaire {affiliate.name} ajouté.",
            )

        logger.info(f"Partner creato: {affiliate.id} - {affiliate.name}")
        return affiliate

    def delete(self, state: AppState, affiliate_id: uuid.UUID) -> None:
        affiliate = self.get_by_id(state, affiliate_id)

        with state.transaction():
            del state.affiliates[affiliate.id]
            history_service.log_action(
                state, HistoryEntity.AFFILIATE, affiliate.id, "Partenaire supprimé."
            )

        logger.info(f"Partner eliminato: {affiliate_id}")


# Istanze globali dei service
owner_service = OwnerService()
affiliate_service = AffiliateService()
