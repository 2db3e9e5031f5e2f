"""
Service Layer per le Spese
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Le spese sono voci contabili inserite a mano: non generano voci
di storico e sono le uniche modificabili nel registro.
"""

import logging
import uuid
from typing import Optional

from fleet_rental.core.exceptions import NotFoundError
from fleet_rental.core.state import AppState
from fleet_rental.models import Expense
from fleet_rental.schemas.expense import ExpenseCreate, ExpenseUpdate
from fleet_rental.services import validation

# Logger per questo modulo
logger = logging.getLogger(__name__)


class ExpenseService:
    """Service per le spese generali."""

    def get_all(self, state: AppState, category: Optional[str] = None) -> list[Expense]:
        """Lista spese, dalla più recente, filtrabile per categoria."""
        expenses = [
            e for e in state.expenses.values()
            if category is None or e.category == category
        ]
        expenses.sort(key=lambda e: e.date, reverse=True)
        return expenses

    def get_by_id(self, state: AppState, expense_id: uuid.UUID) -> Expense:
        expense = state.expenses.get(expense_id)

        if expense is None:
            logger.warning(f"Spesa non trovata: {expense_id}")
            raise NotFoundError.for_entity("Dépense", expense_id)

        return expense

    def create(self, state: AppState, data: ExpenseCreate) -> Expense:
        """
        Registra una spesa.

        Raises:
            BusinessValidationError: Se importo, descrizione o categoria non sono validi
        """
        validation.ensure_valid(
            validation.validate_expense(data.description, data.category, data.amount),
            "Données de la dépense invalides",
        )

        with state.transaction():
            expense = Expense(**data.model_dump())
            state.expenses[expense.id] = expense

        logger.info(f"Spesa registrata: {expense.id} - {expense.category} {expense.amount}")
        return expense

    def update(
        self,
        state: AppState,
        expense_id: uuid.UUID,
        data: ExpenseUpdate,
    ) -> Expense:
        expense = self.get_by_id(state, expense_id)
        updated = expense.model_copy(update=data.model_dump(exclude_unset=True, exclude_none=True))

        validation.ensure_valid(
            validation.validate_expense(updated.description, updated.category, updated.amount),
            "Données de la dépense invalides",
        )

        with state.transaction():
            updated.touch()
            state.expenses[expense.id] = updated

        logger.info(f"Spesa aggiornata: {expense_id}")
        return updated

    def delete(self, state: AppState, expense_id: uuid.UUID) -> None:
        expense = self.get_by_id(state, expense_id)

        with state.transaction():
            del state.expenses[expense.id]

        logger.info(f"Spesa eliminata: {expense_id}")


# Istanza globale del service
expense_service = ExpenseService()
