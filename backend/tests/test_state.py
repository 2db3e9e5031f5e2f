"""
Unit tests for the application state: transazioni, snapshot JSON,
dati di esempio, dashboard e calendario.
"""

from datetime import date
from decimal import Decimal

import pytest

from fleet_rental.core import state as state_module
from fleet_rental.core.state import (
    AppState,
    close_state,
    get_app_state,
    init_state,
    load_state,
    save_state,
)
from fleet_rental.core.sample_data import seed_sample_data
from fleet_rental.schemas.dashboard import CalendarEventType
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services.dashboard_service import dashboard_service
from fleet_rental.services.rental_service import rental_service

SEED_DAY = date(2025, 6, 1)


@pytest.fixture
def seeded_state():
    """Stato popolato con i dati di esempio al 1 giugno 2025."""
    seeded = AppState()
    seed_sample_data(seeded, today=SEED_DAY)
    return seeded


@pytest.fixture
def reset_global_state():
    yield
    state_module._state = None


# ============================================================
# Transazioni
# ============================================================


class TestTransaction:
    """Tests for AppState.transaction."""

    def test_commit_marks_dirty(self, state, vehicle):
        assert state.is_dirty is False

        with state.transaction():
            state.vehicles[vehicle.id].current_mileage = 99000

        assert state.is_dirty is True
        assert state.vehicles[vehicle.id].current_mileage == 99000

    def test_rollback_restores_collections(self, state, vehicle, client):
        """Test un'eccezione a metà blocco annulla tutte le modifiche."""
        with pytest.raises(RuntimeError):
            with state.transaction():
                state.vehicles[vehicle.id].status = VehicleStatus.RENTED
                del state.clients[client.id]
                raise RuntimeError("boom")

        assert state.vehicles[vehicle.id].status == VehicleStatus.AVAILABLE
        assert client.id in state.clients
        assert state.is_dirty is False

    def test_nested_rollback(self, state, rental, vehicle):
        with pytest.raises(ValueError):
            with state.transaction():
                rental_service.transition_status(state, rental.id, RentalStatus.ACTIVE)
                raise ValueError("annulla")

        assert state.rentals[rental.id].status == RentalStatus.RESERVED
        assert state.vehicles[vehicle.id].status == VehicleStatus.RESERVED


# ============================================================
# Snapshot su file
# ============================================================


class TestSnapshot:
    """Tests for save_state / load_state."""

    def test_round_trip(self, tmp_path, state, rental):
        rental_service.record_payment(state, rental.id, Decimal("50000"))
        path = tmp_path / "data" / "state.json"

        save_state(state, path)
        loaded = load_state(path)

        assert path.exists()
        assert state.is_dirty is False
        assert loaded.rentals[rental.id].amount_paid == Decimal("50000")
        assert loaded.rentals[rental.id].payments[0].amount == Decimal("50000")
        assert [h.details for h in loaded.history] == [h.details for h in state.history]

    def test_init_state_loads_existing_file(self, tmp_path, state, vehicle, reset_global_state):
        path = tmp_path / "state.json"
        save_state(state, path)

        loaded = init_state(data_file=path, seed=True)

        assert list(loaded.vehicles) == [vehicle.id]
        assert get_app_state() is loaded

    def test_init_state_seeds_when_missing(self, tmp_path, reset_global_state):
        initialized = init_state(data_file=tmp_path / "missing.json", seed=True)

        assert len(initialized.vehicles) == 4
        assert initialized.is_dirty is False

    def test_init_state_empty_without_seed(self, reset_global_state):
        initialized = init_state(seed=False)

        assert initialized.vehicles == {}

    def test_get_app_state_before_init(self, reset_global_state):
        close_state()

        with pytest.raises(RuntimeError):
            get_app_state()


# ============================================================
# Dati di esempio e dashboard
# ============================================================


class TestSampleData:
    """Tests for the sample data."""

    def test_seed_contents(self, seeded_state):
        assert len(seeded_state.vehicles) == 4
        assert len(seeded_state.clients) == 2
        assert len(seeded_state.rentals) == 2
        assert len(seeded_state.accidents) == 1

    def test_seed_balances(self, seeded_state):
        for rental in seeded_state.rentals.values():
            assert rental.amount_paid + rental.balance_due == rental.price


class TestDashboard:
    """Tests for DashboardService.get_stats."""

    def test_stats_on_sample_data(self, seeded_state):
        stats = dashboard_service.get_stats(seeded_state, today=SEED_DAY)

        assert stats.total_vehicles == 4
        assert stats.available_vehicles == 1
        assert stats.rented_vehicles == 1
        assert stats.total_clients == 2
        assert stats.alert_count == 1
        assert stats.total_revenue == Decimal("0")
        assert len(stats.active_rentals) == 2

    def test_revenue_counts_completed_rentals(self, state, rental):
        rental_service.transition_status(state, rental.id, RentalStatus.COMPLETED)

        stats = dashboard_service.get_stats(state)

        assert stats.total_revenue == Decimal("175000")
        assert stats.active_rentals == []


class TestCalendar:
    """Tests for DashboardService.get_calendar."""

    def test_rental_days_are_clamped_to_month(self, seeded_state):
        calendar = dashboard_service.get_calendar(seeded_state, 2025, 6)

        first_day = calendar.events["2025-06-01"]
        assert {e.type for e in first_day} == {
            CalendarEventType.RESERVATION,
            CalendarEventType.RENTAL,
        }
        assert "2025-06-08" in calendar.events
        assert all(
            e.type != CalendarEventType.RESERVATION
            for e in calendar.events.get("2025-06-09", [])
        )

    def test_payment_flag(self, seeded_state):
        calendar = dashboard_service.get_calendar(seeded_state, 2025, 6)

        flags = {e.type: e.is_paid for e in calendar.events["2025-06-01"]}
        assert flags[CalendarEventType.RESERVATION] is False
        assert flags[CalendarEventType.RENTAL] is True

    def test_deadlines_in_month(self, seeded_state):
        calendar = dashboard_service.get_calendar(seeded_state, 2025, 6)

        titles = [e.title for e in calendar.events["2025-06-26"]]
        assert titles == ["Assurance 208"]

    def test_dates_sorted(self, seeded_state):
        calendar = dashboard_service.get_calendar(seeded_state, 2025, 6)

        assert list(calendar.events) == sorted(calendar.events)
