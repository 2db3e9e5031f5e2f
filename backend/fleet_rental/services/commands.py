"""
Comandi tipizzati e dispatch verso i service
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Ogni comando è un modello Pydantic con un campo `type` discriminante.
`dispatch()` instrada il comando al service competente dentro una
transazione dello stato: il comando si applica per intero oppure
lo stato resta invariato.

Example:
    command = CommandAdapter.validate_python(
        {"type": "record_payment", "rental_id": "...", "amount": "50000"}
    )
    rental = dispatch(state, command)
"""

import datetime
import logging
import uuid
from decimal import Decimal
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from fleet_rental.core.state import AppState
from fleet_rental.schemas.contravention import ContraventionStatus
from fleet_rental.schemas.maintenance import AccidentStatus, MaintenanceStatus
from fleet_rental.schemas.rental import RentalCreate, RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services.contravention_service import contravention_service
from fleet_rental.services.driver_service import driver_service
from fleet_rental.services.maintenance_service import accident_service, maintenance_service
from fleet_rental.services.rental_service import rental_service
from fleet_rental.services.vehicle_service import vehicle_service

# Logger per questo modulo
logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Comandi
# -------------------------------------------------------------------

class CreateRental(RentalCreate):
    type: Literal["create_rental"] = "create_rental"


class RecordPayment(BaseModel):
    type: Literal["record_payment"] = "record_payment"
    rental_id: uuid.UUID
    amount: Decimal
    date: Optional[datetime.date] = None


class TransitionRentalStatus(BaseModel):
    type: Literal["transition_rental_status"] = "transition_rental_status"
    rental_id: uuid.UUID
    status: RentalStatus


class DeleteRental(BaseModel):
    type: Literal["delete_rental"] = "delete_rental"
    rental_id: uuid.UUID


class UpdateVehicleStatus(BaseModel):
    type: Literal["update_vehicle_status"] = "update_vehicle_status"
    vehicle_id: uuid.UUID
    status: VehicleStatus


class SetDriverAvailability(BaseModel):
    type: Literal["set_driver_availability"] = "set_driver_availability"
    driver_id: uuid.UUID
    is_available: bool


class UpdateMaintenanceStatus(BaseModel):
    type: Literal["update_maintenance_status"] = "update_maintenance_status"
    record_id: uuid.UUID
    status: MaintenanceStatus


class UpdateAccidentStatus(BaseModel):
    type: Literal["update_accident_status"] = "update_accident_status"
    accident_id: uuid.UUID
    status: AccidentStatus
    final_cost: Optional[Decimal] = Field(None, ge=0)


class UpdateContraventionStatus(BaseModel):
    type: Literal["update_contravention_status"] = "update_contravention_status"
    contravention_id: uuid.UUID
    status: ContraventionStatus


Command = Annotated[
    Union[
        CreateRental,
        RecordPayment,
        TransitionRentalStatus,
        DeleteRental,
        UpdateVehicleStatus,
        SetDriverAvailability,
        UpdateMaintenanceStatus,
        UpdateAccidentStatus,
        UpdateContraventionStatus,
    ],
    Field(discriminator="type"),
]

CommandAdapter: TypeAdapter[Command] = TypeAdapter(Command)


# -------------------------------------------------------------------
# Registro degli handler
# -------------------------------------------------------------------

_HANDLERS: dict[type, Callable[[AppState, Any], Optional[BaseModel]]] = {}


def handles(command_type: type):
    """Registra la funzione decorata come handler di un tipo di comando."""

    def decorator(func):
        _HANDLERS[command_type] = func
        return func

    return decorator


@handles(CreateRental)
def _create_rental(state: AppState, command: CreateRental):
    return rental_service.create(state, command)


@handles(RecordPayment)
def _record_payment(state: AppState, command: RecordPayment):
    return rental_service.record_payment(
        state, command.rental_id, command.amount, command.date
    )


@handles(TransitionRentalStatus)
def _transition_rental_status(state: AppState, command: TransitionRentalStatus):
    return rental_service.transition_status(state, command.rental_id, command.status)


@handles(DeleteRental)
def _delete_rental(state: AppState, command: DeleteRental):
    rental_service.delete(state, command.rental_id)
    return None


@handles(UpdateVehicleStatus)
def _update_vehicle_status(state: AppState, command: UpdateVehicleStatus):
    return vehicle_service.update_status(state, command.vehicle_id, command.status)


@handles(SetDriverAvailability)
def _set_driver_availability(state: AppState, command: SetDriverAvailability):
    return driver_service.set_availability(state, command.driver_id, command.is_available)


@handles(UpdateMaintenanceStatus)
def _update_maintenance_status(state: AppState, command: UpdateMaintenanceStatus):
    return maintenance_service.update_status(state, command.record_id, command.status)


@handles(UpdateAccidentStatus)
def _update_accident_status(state: AppState, command: UpdateAccidentStatus):
    return accident_service.update_status(
        state, command.accident_id, command.status, command.final_cost
    )


@handles(UpdateContraventionStatus)
def _update_contravention_status(state: AppState, command: UpdateContraventionStatus):
    return contravention_service.update_status(
        state, command.contravention_id, command.status
    )


def dispatch(state: AppState, command: BaseModel) -> Optional[BaseModel]:
    """
    Esegue un comando sul service competente.

    Args:
        state: Stato applicativo
        command: Uno dei modelli dell'unione Command

    Returns:
        L'entità creata/modificata, oppure None per le eliminazioni

    Raises:
        TypeError: Se il tipo di comando non ha un handler registrato
        AppException: Le eccezioni del service vengono propagate dopo il rollback
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Nessun handler registrato per {type(command).__name__}")

    logger.debug(f"Dispatch comando {command.type}")

    with state.transaction():
        return handler(state, command)
