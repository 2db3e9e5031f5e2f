"""
Router FastAPI per i comandi tipizzati
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Punto di ingresso unico per le mutazioni del noleggio e degli stati:
il corpo della richiesta è uno dei comandi dell'unione `Command`,
riconosciuto dal campo `type`.
"""

import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from fleet_rental.core.state import AppState, get_state
from fleet_rental.services.commands import Command, dispatch

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/commands",
    tags=["Comandi"],
)


class CommandResult(BaseModel):
    """Esito di un comando eseguito."""

    type: str
    entity_id: Optional[uuid.UUID] = None
    result: Optional[dict[str, Any]] = None


@router.post(
    "/",
    name="comando_esegui",
    summary="Esegui comando",
    description="Esegue un comando in modo atomico: si applica per intero oppure non modifica nulla.",
    response_model=CommandResult,
    status_code=status.HTTP_200_OK,
)
async def execute_command(
    command: Command,
    state: AppState = Depends(get_state),
) -> CommandResult:
    """
    Esegue un comando tipizzato.

    Raises:
        NotFoundError: Se un'entità referenziata non esiste
        BusinessValidationError: Se il comando viola una regola di business
    """
    result = dispatch(state, command)
    logger.info(f"Comando eseguito: {command.type}")

    if result is None:
        return CommandResult(type=command.type)

    return CommandResult(
        type=command.type,
        entity_id=getattr(result, "id", None),
        result=result.model_dump(mode="json"),
    )
