"""
Service Layer per lo storico delle operazioni
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.state import AppState
from fleet_rental.models import HistoryLog
from fleet_rental.schemas.history import HistoryEntity

# Logger per questo modulo
logger = logging.getLogger(__name__)


class HistoryService:
    """
    Service per lo storico append-only.

    Le voci sono inserite in testa alla lista (la più recente per prima)
    e non vengono mai modificate né cancellate.
    """

    def log_action(
        self,
        state: AppState,
        entity: HistoryEntity,
        entity_id: uuid.UUID,
        details: str,
    ) -> HistoryLog:
        """
        Registra un'azione nello storico.

        Args:
            state: Stato applicativo
            entity: Tipo di entità coinvolta
            entity_id: UUID dell'entità
            details: Descrizione leggibile dell'azione

        Returns:
            La voce di storico creata
        """
        entry = HistoryLog(entity=entity, entity_id=entity_id, details=details)
        state.history.insert(0, entry)
        logger.debug("Storico [%s %s]: %s", entity.value, entity_id, details)
        return entry

    def get_all(
        self,
        state: AppState,
        entity: Optional[HistoryEntity] = None,
        entity_id: Optional[uuid.UUID] = None,
        limit: Optional[int] = None,
    ) -> list[HistoryLog]:
        """
        Recupera lo storico, dal più recente.

        Args:
            state: Stato applicativo
            entity: Filtro per tipo di entità (opzionale)
            entity_id: Filtro per UUID dell'entità (opzionale)
            limit: Numero massimo di voci (opzionale)
        """
        entries = [
            e for e in state.history
            if (entity is None or e.entity == entity)
            and (entity_id is None or e.entity_id == entity_id)
        ]
        if limit is not None:
            entries = entries[:limit]
        return entries


# Istanza globale del service
history_service = HistoryService()
