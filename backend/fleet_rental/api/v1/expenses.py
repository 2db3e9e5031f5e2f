"""
Router FastAPI per le Spese
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Le spese sono gli unici movimenti modificabili del registro contabile.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from fleet_rental.services.expense_service import expense_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/expenses",
    tags=["Spese"],
)


@router.get(
    "/",
    name="spese_lista",
    summary="Lista spese",
    response_model=list[ExpenseRead],
    status_code=status.HTTP_200_OK,
)
async def get_expenses(
    category: Optional[str] = Query(None, description="Filtro per categoria"),
    state: AppState = Depends(get_state),
) -> list[ExpenseRead]:
    return [ExpenseRead.model_validate(e) for e in expense_service.get_all(state, category=category)]


@router.post(
    "/",
    name="spesa_crea",
    summary="Registra spesa",
    response_model=ExpenseRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    data: ExpenseCreate,
    state: AppState = Depends(get_state),
) -> ExpenseRead:
    return ExpenseRead.model_validate(expense_service.create(state, data))


@router.put(
    "/{expense_id}",
    name="spesa_aggiorna",
    summary="Aggiorna spesa",
    response_model=ExpenseRead,
    status_code=status.HTTP_200_OK,
)
async def update_expense(
    expense_id: uuid.UUID,
    data: ExpenseUpdate,
    state: AppState = Depends(get_state),
) -> ExpenseRead:
    return ExpenseRead.model_validate(expense_service.update(state, expense_id, data))


@router.delete(
    "/{expense_id}",
    name="spesa_elimina",
    summary="Elimina spesa",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_expense(
    expense_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    expense_service.delete(state, expense_id)
