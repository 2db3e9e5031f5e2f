"""
Pytest configuration and fixtures for the Fleet Rental services and API.

Ogni test lavora su un AppState vuoto e isolato: le entità di base
(proprietario, veicolo, cliente, autista) vengono inserite direttamente
nello stato, così le date di scadenza possono essere arbitrarie.
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fleet_rental.core.config import settings
from fleet_rental.core.state import AppState, get_state
from fleet_rental.main import app
from fleet_rental.models import Client, Driver, Owner, Vehicle
from fleet_rental.schemas.rental import RentalCreate
from fleet_rental.schemas.vehicle import VehicleStatus
from fleet_rental.services.rental_service import rental_service


# ============================================================
# Stato applicativo
# ============================================================


@pytest.fixture
def override_settings(monkeypatch):
    """
    Modifica temporanea delle impostazioni.

    Settings è frozen: i valori vengono sostituiti direttamente nel
    __dict__ dell'istanza e ripristinati a fine test.
    """

    def _override(**values):
        for name, value in values.items():
            monkeypatch.setitem(settings.__dict__, name, value)

    return _override


@pytest.fixture(autouse=True)
def isolated_settings(override_settings):
    """Nessuna scrittura su file e transizioni libere in tutti i test."""
    override_settings(data_file=None, strict_rental_transitions=False)


@pytest.fixture
def state():
    """Crea uno stato applicativo vuoto."""
    return AppState()


@pytest.fixture
def today():
    return date.today()


# ============================================================
# Entità di base
# ============================================================


def add_vehicle(state: AppState, owner: Owner, **kwargs) -> Vehicle:
    """Inserisce un veicolo nello stato con valori di default sensati."""
    today = date.today()
    values = {
        "make": "Toyota",
        "model": "Yaris",
        "year": 2022,
        "plate": f"TS-{uuid.uuid4().hex[:6].upper()}",
        "status": VehicleStatus.AVAILABLE,
        "insurance_expiry": today + timedelta(days=200),
        "technical_inspection_expiry": today + timedelta(days=300),
        "next_maintenance": today + timedelta(days=120),
        "owner_id": owner.id,
        "purchase_value": Decimal("8500000"),
        "purchase_date": date(2022, 1, 15),
        "amortization_rate": Decimal("20"),
    }
    values.update(kwargs)
    vehicle = Vehicle(**values)
    state.vehicles[vehicle.id] = vehicle
    return vehicle


def add_client(state: AppState, **kwargs) -> Client:
    values = {
        "name": "Moussa Diop",
        "phone": "+221 78 987 65 43",
        "email": "moussa.diop@client.com",
        "license_number": "PERMIS-DK-2020-001",
    }
    values.update(kwargs)
    client = Client(**values)
    state.clients[client.id] = client
    return client


@pytest.fixture
def owner(state):
    """Crea un proprietario nello stato."""
    owner = Owner(
        name="Propriétaire Exemple SARL",
        phone="+221 77 123 45 67",
        email="proprio@exemple.com",
    )
    state.owners[owner.id] = owner
    return owner


@pytest.fixture
def vehicle(state, owner):
    """Crea un veicolo disponibile con scadenze lontane."""
    return add_vehicle(state, owner)


@pytest.fixture
def make_vehicle(state, owner):
    """Factory: crea veicoli aggiuntivi dello stesso proprietario."""

    def _make(**kwargs):
        return add_vehicle(state, owner, **kwargs)

    return _make


@pytest.fixture
def client(state):
    """Crea un cliente con dati validi."""
    return add_client(state)


@pytest.fixture
def make_client(state):
    """Factory: crea clienti aggiuntivi."""

    def _make(**kwargs):
        return add_client(state, **kwargs)

    return _make


@pytest.fixture
def driver(state):
    """Crea un autista disponibile."""
    driver = Driver(name="Ibrahima Fall", phone="+221 77 000 11 22", license_number="DRV-001")
    state.drivers[driver.id] = driver
    return driver


@pytest.fixture
def rental_data(vehicle, client, today):
    """Dati per un noleggio di una settimana a 175.000."""
    return RentalCreate(
        vehicle_id=vehicle.id,
        client_id=client.id,
        start_date=today,
        end_date=today + timedelta(days=7),
        price=Decimal("175000"),
    )


@pytest.fixture
def rental(state, rental_data):
    """Crea un noleggio prenotato tramite il service."""
    return rental_service.create(state, rental_data)


# ============================================================
# Client HTTP
# ============================================================


@pytest.fixture
def api_client(state):
    """
    TestClient FastAPI collegato allo stato del test.

    Il lifespan non viene eseguito: la dependency get_state è
    sostituita per restituire lo stato della fixture.
    """

    async def override_get_state():
        yield state

    app.dependency_overrides[get_state] = override_get_state
    yield TestClient(app)
    app.dependency_overrides.clear()
