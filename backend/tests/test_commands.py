"""
Unit tests for typed commands and dispatch.
"""

from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from fleet_rental.core.exceptions import BusinessValidationError, NotFoundError
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services.commands import (
    CommandAdapter,
    CreateRental,
    RecordPayment,
    SetDriverAvailability,
    TransitionRentalStatus,
    dispatch,
)


# ============================================================
# Parsing
# ============================================================


class TestCommandParsing:
    """Tests for the discriminated command union."""

    def test_parse_record_payment(self, rental):
        command = CommandAdapter.validate_python(
            {"type": "record_payment", "rental_id": str(rental.id), "amount": "50000"}
        )

        assert isinstance(command, RecordPayment)
        assert command.amount == Decimal("50000")
        assert command.date is None

    def test_parse_create_rental(self, rental_data):
        payload = {"type": "create_rental", **rental_data.model_dump(mode="json")}

        command = CommandAdapter.validate_python(payload)

        assert isinstance(command, CreateRental)
        assert command.price == Decimal("175000")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            CommandAdapter.validate_python({"type": "launch_rocket"})

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            CommandAdapter.validate_python({"type": "transition_rental_status"})


# ============================================================
# Dispatch
# ============================================================


class TestDispatch:
    """Tests for dispatch on the application state."""

    def test_create_rental_command(self, state, rental_data, vehicle):
        command = CreateRental(**rental_data.model_dump())

        created = dispatch(state, command)

        assert created.id in state.rentals
        assert state.vehicles[vehicle.id].status == VehicleStatus.RESERVED

    def test_payment_command(self, state, rental):
        updated = dispatch(
            state, RecordPayment(rental_id=rental.id, amount=Decimal("75000"))
        )

        assert updated.balance_due == Decimal("100000")

    def test_transition_command(self, state, rental, vehicle):
        dispatch(
            state,
            TransitionRentalStatus(rental_id=rental.id, status=RentalStatus.ACTIVE),
        )

        assert state.vehicles[vehicle.id].status == VehicleStatus.RENTED

    def test_delete_returns_none(self, state, rental):
        command = CommandAdapter.validate_python(
            {"type": "delete_rental", "rental_id": str(rental.id)}
        )

        assert dispatch(state, command) is None
        assert state.rentals == {}

    def test_driver_availability_command(self, state, driver):
        dispatch(state, SetDriverAvailability(driver_id=driver.id, is_available=False))

        assert state.drivers[driver.id].is_available is False

    def test_failed_command_leaves_state_unchanged(self, state, rental):
        """Test pagamento rifiutato: nessuna modifica e nessuno storico aggiunto."""
        history_before = len(state.history)

        with pytest.raises(BusinessValidationError):
            dispatch(state, RecordPayment(rental_id=rental.id, amount=Decimal("999999")))

        assert state.rentals[rental.id].payments == []
        assert len(state.history) == history_before

    def test_unknown_entity_propagates(self, state):
        with pytest.raises(NotFoundError):
            dispatch(
                state,
                RecordPayment(
                    rental_id="00000000-0000-0000-0000-0000000000cc", amount=Decimal("1")
                ),
            )

    def test_unregistered_command_type(self, state):
        with pytest.raises(TypeError):
            dispatch(state, UnregisteredCommand())


class UnregisteredCommand(BaseModel):
    """Comando senza handler registrato."""

    type: str = "unregistered"
