"""
Unit tests for the registry services: veicoli, clienti, autisti,
proprietari, partner, manutenzioni, sinistri, contravvenzioni e spese.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from fleet_rental.core.exceptions import (
    BusinessValidationError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    ResourceInUseError,
)
from fleet_rental.schemas.client import ClientCreate, ClientUpdate, LoyaltyTier
from fleet_rental.schemas.contravention import ContraventionCreate, ContraventionStatus
from fleet_rental.schemas.driver import DriverCreate
from fleet_rental.schemas.expense import ExpenseCreate, ExpenseUpdate
from fleet_rental.schemas.history import HistoryEntity
from fleet_rental.schemas.maintenance import (
    AccidentCreate,
    AccidentStatus,
    MaintenanceCreate,
    MaintenanceStatus,
)
from fleet_rental.schemas.partner import AffiliateCreate, OwnerCreate
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.schemas.vehicle import VehicleCreate, VehicleStatus, VehicleUpdate
from fleet_rental.services.client_service import client_service
from fleet_rental.services.contravention_service import contravention_service
from fleet_rental.services.driver_service import driver_service
from fleet_rental.services.expense_service import expense_service
from fleet_rental.services.history_service import history_service
from fleet_rental.services.maintenance_service import accident_service, maintenance_service
from fleet_rental.services.partner_service import affiliate_service, owner_service
from fleet_rental.services.rental_service import rental_service
from fleet_rental.services.vehicle_service import vehicle_service


@pytest.fixture
def vehicle_create(owner, today):
    """Dati validi per la registrazione di un veicolo."""
    return VehicleCreate(
        make="Peugeot",
        model="208",
        year=2021,
        plate="bc 456-de",
        owner_id=owner.id,
        purchase_value=Decimal("9200000"),
        purchase_date=date(2021, 3, 20),
        insurance_expiry=today + timedelta(days=60),
        technical_inspection_expiry=today + timedelta(days=365),
    )


# ============================================================
# Veicoli
# ============================================================


class TestVehicleService:
    """Tests for VehicleService."""

    def test_create_normalizes_plate(self, state, vehicle_create):
        """Test targa in maiuscolo e senza spazi."""
        vehicle = vehicle_service.create(state, vehicle_create)

        assert vehicle.plate == "BC456-DE"
        assert vehicle.status == VehicleStatus.AVAILABLE
        assert state.history[0].details == "Véhicule Peugeot 208 ajouté."

    def test_create_duplicate_plate(self, state, vehicle_create):
        vehicle_service.create(state, vehicle_create)

        with pytest.raises(DuplicateError):
            vehicle_service.create(state, vehicle_create)

        assert len(state.vehicles) == 1

    def test_create_unknown_owner(self, state, vehicle_create):
        data = vehicle_create.model_copy(
            update={"owner_id": "00000000-0000-0000-0000-0000000000aa"}
        )

        with pytest.raises(NotFoundError):
            vehicle_service.create(state, data)

    def test_create_rejects_past_expiry(self, state, vehicle_create, today):
        """Test scadenza assicurazione già passata rifiutata alla registrazione."""
        data = vehicle_create.model_copy(update={"insurance_expiry": today - timedelta(days=1)})

        with pytest.raises(BusinessValidationError) as exc_info:
            vehicle_service.create(state, data)

        assert exc_info.value.extra["reasons"] == [
            "La date d'expiration de l'assurance ne peut être dans le passé."
        ]
        assert state.vehicles == {}

    def test_create_rejects_future_purchase_and_zero_value(self, state, vehicle_create, today):
        data = vehicle_create.model_copy(
            update={"purchase_date": today + timedelta(days=1), "purchase_value": Decimal("0")}
        )

        with pytest.raises(BusinessValidationError) as exc_info:
            vehicle_service.create(state, data)

        assert len(exc_info.value.extra["reasons"]) == 2

    def test_update_keeps_unchanged_expiry(self, state, vehicle, today):
        """Test una scadenza passata non modificata non blocca l'aggiornamento."""
        vehicle.insurance_expiry = today - timedelta(days=10)

        updated = vehicle_service.update(state, vehicle.id, VehicleUpdate(current_mileage=20000))

        assert updated.current_mileage == 20000
        assert updated.insurance_expiry == today - timedelta(days=10)

    def test_update_can_clear_expiry(self, state, vehicle):
        updated = vehicle_service.update(
            state, vehicle.id, VehicleUpdate(next_maintenance=None)
        )

        assert updated.next_maintenance is None

    def test_update_status_logs_label(self, state, vehicle):
        vehicle_service.update_status(state, vehicle.id, VehicleStatus.MAINTENANCE)

        assert state.vehicles[vehicle.id].status == VehicleStatus.MAINTENANCE
        assert state.history[0].details == "Statut mis à jour à En Maintenance."

    def test_search_requires_every_term(self, state, vehicle, make_vehicle):
        make_vehicle(make="Toyota", model="Corolla")

        items, total = vehicle_service.get_all(state, search="toyota yaris")

        assert total == 1
        assert items[0].id == vehicle.id

    def test_filter_by_status(self, state, vehicle, make_vehicle):
        make_vehicle(status=VehicleStatus.RENTED)

        items, total = vehicle_service.get_all(state, status=VehicleStatus.RENTED)

        assert total == 1
        assert items[0].status == VehicleStatus.RENTED

    def test_delete_refused_with_open_rental(self, state, rental, vehicle):
        """Test veicolo con noleggio in corso non eliminabile."""
        with pytest.raises(ConflictError):
            vehicle_service.delete(state, vehicle.id)

        assert vehicle.id in state.vehicles

    def test_delete_after_completion(self, state, rental, vehicle):
        rental_service.transition_status(state, rental.id, RentalStatus.COMPLETED)

        vehicle_service.delete(state, vehicle.id)

        assert vehicle.id not in state.vehicles


# ============================================================
# Clienti
# ============================================================


class TestClientService:
    """Tests for ClientService."""

    def test_create_client(self, state):
        client = client_service.create(
            state,
            ClientCreate(
                name="Aïssatou Gueye",
                phone="+221 76 555 44 33",
                email="aissatou@client.com",
                license_number="PERMIS-002",
            ),
        )

        assert client.id in state.clients
        assert state.history[0].details == "Client Aïssatou Gueye ajouté."

    def test_create_rejects_bad_formats(self, state):
        """Test telefono ed email non validi."""
        with pytest.raises(BusinessValidationError) as exc_info:
            client_service.create(
                state,
                ClientCreate(name="X", phone="12ab", email="nope", license_number="P"),
            )

        assert exc_info.value.extra["reasons"] == [
            "Le format du téléphone est invalide.",
            "Le format de l'email est invalide.",
        ]

    def test_create_rejects_missing_fields(self, state):
        with pytest.raises(BusinessValidationError) as exc_info:
            client_service.create(
                state,
                ClientCreate(name=" ", phone="", email="", license_number=""),
            )

        assert len(exc_info.value.extra["reasons"]) == 4

    def test_update_keeps_denormalized_name(self, state, client, rental):
        """Test il nome sul noleggio esistente non cambia."""
        client_service.update(state, client.id, ClientUpdate(name="Moussa D."))

        assert state.clients[client.id].name == "Moussa D."
        assert state.rentals[rental.id].customer_name == "Moussa Diop"

    def test_detail_includes_loyalty_and_history(self, state, client):
        client_service.update(state, client.id, ClientUpdate(notes="VIP potentiel"))

        detail = client_service.get_detail(state, client.id)

        assert detail.loyalty.tier == LoyaltyTier.NOUVEAU
        assert detail.loyalty.rental_count == 0
        assert [h.entity for h in detail.history] == [HistoryEntity.CLIENT]

    def test_delete_refused_with_open_rental(self, state, client, rental):
        with pytest.raises(ConflictError):
            client_service.delete(state, client.id)

    def test_search(self, state, client, make_client):
        make_client(name="Fatou Ndiaye", email="fatou@client.com")

        items, total = client_service.get_all(state, search="fatou")

        assert total == 1
        assert items[0].name == "Fatou Ndiaye"


# ============================================================
# Autisti, proprietari e partner
# ============================================================


class TestDriverService:
    """Tests for DriverService."""

    def test_create_available(self, state):
        driver = driver_service.create(
            state, DriverCreate(name="Ibrahima", phone="770001122", license_number="D-1")
        )

        assert driver.is_available is True

    def test_filter_by_availability(self, state, driver, rental_data):
        rental_service.create(state, rental_data.model_copy(update={"driver_id": driver.id}))

        assert driver_service.get_all(state, is_available=True) == []
        assert driver_service.get_all(state, is_available=False)[0].id == driver.id

    def test_set_availability(self, state, driver):
        driver_service.set_availability(state, driver.id, False)

        assert state.drivers[driver.id].is_available is False
        assert state.history[0].details == "Disponibilité du chauffeur mise à jour."

    def test_delete_refused_when_assigned(self, state, driver, rental_data):
        rental = rental_service.create(
            state, rental_data.model_copy(update={"driver_id": driver.id})
        )

        with pytest.raises(ResourceInUseError) as exc_info:
            driver_service.delete(state, driver.id)

        assert exc_info.value.extra == {"rental_ids": [str(rental.id)]}
        assert driver.id in state.drivers


class TestPartnerServices:
    """Tests for OwnerService and AffiliateService."""

    def test_owner_with_vehicles_cannot_be_deleted(self, state, owner, vehicle):
        with pytest.raises(ResourceInUseError) as exc_info:
            owner_service.delete(state, owner.id)

        assert exc_info.value.blocking_ids == [str(vehicle.id)]

    def test_owner_create_and_delete(self, state):
        owner = owner_service.create(
            state, OwnerCreate(name="Garage Dakar", phone="+221 33 000 00 00", email="")
        )

        owner_service.delete(state, owner.id)

        assert owner.id not in state.owners

    def test_affiliate_commission_range(self, state):
        with pytest.raises(BusinessValidationError):
            affiliate_service.create(
                state,
                AffiliateCreate(name="Agence", phone="770000000", commission_rate=Decimal("120")),
            )

    def test_affiliate_create(self, state):
        affiliate = affiliate_service.create(
            state,
            AffiliateCreate(name="Agence", phone="770000000", commission_rate=Decimal("10")),
        )

        assert affiliate_service.get_all(state) == [affiliate]


# ============================================================
# Eventi sui veicoli
# ============================================================


class TestVehicleEvents:
    """Tests for maintenance, accidents and contraventions."""

    def test_maintenance_lifecycle(self, state, vehicle, today):
        record = maintenance_service.create(
            state,
            MaintenanceCreate(
                vehicle_id=vehicle.id,
                description="Vidange",
                date=today,
                cost=Decimal("45000"),
            ),
        )

        maintenance_service.update_status(state, record.id, MaintenanceStatus.COMPLETED)

        assert state.maintenance_records[record.id].status == MaintenanceStatus.COMPLETED
        assert state.history[0].details == "Statut de maintenance mis à jour à Terminé."

    def test_maintenance_negative_cost(self, state, vehicle, today):
        with pytest.raises(BusinessValidationError):
            maintenance_service.create(
                state,
                MaintenanceCreate(
                    vehicle_id=vehicle.id, description="Pneus", date=today, cost=Decimal("-1")
                ),
            )

    def test_maintenance_unknown_vehicle(self, state, today):
        with pytest.raises(NotFoundError):
            maintenance_service.create(
                state,
                MaintenanceCreate(
                    vehicle_id="00000000-0000-0000-0000-0000000000bb",
                    description="Pneus",
                    date=today,
                ),
            )

    def test_accident_starts_pending(self, state, vehicle, rental, today):
        accident = accident_service.create(
            state,
            AccidentCreate(
                vehicle_id=vehicle.id,
                rental_id=rental.id,
                date=today,
                description="Rétroviseur cassé",
                estimated_cost=Decimal("50000"),
            ),
        )

        assert accident.status == AccidentStatus.PENDING

        accident_service.update_status(
            state, accident.id, AccidentStatus.REPAIRED, final_cost=Decimal("42000")
        )

        assert state.accidents[accident.id].final_cost == Decimal("42000")

    def test_contravention_filters(self, state, vehicle, rental, today):
        created = contravention_service.create(
            state,
            ContraventionCreate(
                vehicle_id=vehicle.id,
                rental_id=rental.id,
                description="Stationnement",
                date=today,
                amount=Decimal("6000"),
            ),
        )
        contravention_service.update_status(state, created.id, ContraventionStatus.PAID)

        paid = contravention_service.get_all(state, status=ContraventionStatus.PAID)
        by_rental = contravention_service.get_all(state, rental_id=rental.id)

        assert [c.id for c in paid] == [created.id]
        assert [c.id for c in by_rental] == [created.id]

    def test_contravention_amount_must_be_positive(self, state, vehicle, today):
        with pytest.raises(BusinessValidationError):
            contravention_service.create(
                state,
                ContraventionCreate(
                    vehicle_id=vehicle.id, description="Feu rouge", date=today, amount=Decimal("0")
                ),
            )


# ============================================================
# Spese e storico
# ============================================================


class TestExpenseService:
    """Tests for ExpenseService."""

    def test_create_update_delete(self, state, today):
        expense = expense_service.create(
            state,
            ExpenseCreate(date=today, description="Plein", category="Carburant", amount=Decimal("10000")),
        )

        updated = expense_service.update(state, expense.id, ExpenseUpdate(amount=Decimal("12000")))
        assert updated.amount == Decimal("12000")
        assert updated.description == "Plein"

        expense_service.delete(state, expense.id)
        assert state.expenses == {}

    def test_unknown_category_rejected(self, state, today):
        with pytest.raises(BusinessValidationError):
            expense_service.create(
                state,
                ExpenseCreate(date=today, description="Divers", category="Loisirs", amount=Decimal("1")),
            )

    def test_expenses_are_not_logged(self, state, today):
        expense_service.create(
            state,
            ExpenseCreate(date=today, description="Stylos", category="Fournitures", amount=Decimal("500")),
        )

        assert state.history == []


class TestHistoryService:
    """Tests for HistoryService."""

    def test_newest_first_and_filters(self, state, vehicle, rental):
        vehicle_service.update_status(state, vehicle.id, VehicleStatus.RESERVED)

        entries = history_service.get_all(state)
        rentals_only = history_service.get_all(state, entity=HistoryEntity.RENTAL)

        assert entries[0].entity == HistoryEntity.VEHICLE
        assert entries[1].entity == HistoryEntity.RENTAL
        assert [e.entity_id for e in rentals_only] == [rental.id]
        assert len(history_service.get_all(state, limit=1)) == 1
