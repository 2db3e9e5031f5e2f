"""
Dati di esempio per il primo avvio
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Popola uno stato vuoto con un proprietario, quattro veicoli, due
clienti, due noleggi e un sinistro. Le scadenze sono relative alla
data odierna, così la dashboard mostra subito avvisi realistici.
"""

import datetime
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from fleet_rental.models import Accident, Client, Owner, Payment, Rental, Vehicle
from fleet_rental.schemas.maintenance import AccidentSeverity, AccidentStatus
from fleet_rental.schemas.rental import RentalStatus
from fleet_rental.schemas.vehicle import VehicleStatus

if TYPE_CHECKING:
    from fleet_rental.core.state import AppState

# Logger per questo modulo
logger = logging.getLogger(__name__)


def _add_years(day: datetime.date, years: int) -> datetime.date:
    """Somma anni a una data; il 29 febbraio diventa 28 negli anni non bisestili."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def seed_sample_data(state: "AppState", today: Optional[datetime.date] = None) -> None:
    """
    Inserisce i dati di esempio nello stato.

    Args:
        state: Stato applicativo (di norma vuoto)
        today: Data di riferimento per le scadenze (default oggi)
    """
    today = today or datetime.date.today()
    days = datetime.timedelta

    owner = Owner(
        name="Propriétaire Exemple SARL",
        phone="+221 77 123 45 67",
        email="proprio@exemple.com",
        payment_details="FR76 3000 4000 0500 0012 3456 789",
    )

    yaris = Vehicle(
        make="Toyota",
        model="Yaris",
        year=2022,
        plate="AA-123-BB",
        status=VehicleStatus.RESERVED,
        insurance_expiry=today + days(90),
        next_maintenance=today + days(180),
        technical_inspection_expiry=_add_years(today, 1),
        current_mileage=15000,
        owner_id=owner.id,
        purchase_value=Decimal("8500000"),
        purchase_date=datetime.date(2022, 1, 15),
        amortization_rate=Decimal("20"),
    )
    peugeot = Vehicle(
        make="Peugeot",
        model="208",
        year=2021,
        plate="BC-456-DE",
        status=VehicleStatus.AVAILABLE,
        insurance_expiry=today + days(25),
        next_maintenance=today + days(300),
        technical_inspection_expiry=_add_years(today, 1),
        current_mileage=25000,
        owner_id=owner.id,
        purchase_value=Decimal("9200000"),
        purchase_date=datetime.date(2021, 3, 20),
        amortization_rate=Decimal("20"),
    )
    clio = Vehicle(
        make="Renault",
        model="Clio",
        year=2020,
        plate="FG-789-HI",
        status=VehicleStatus.MAINTENANCE,
        insurance_expiry=today + days(365),
        next_maintenance=today - days(5),
        technical_inspection_expiry=_add_years(today, -1),
        current_mileage=42000,
        owner_id=owner.id,
        purchase_value=Decimal("7800000"),
        purchase_date=datetime.date(2020, 7, 10),
        amortization_rate=Decimal("18"),
    )
    tucson = Vehicle(
        make="Hyundai",
        model="Tucson",
        year=2023,
        plate="JK-012-LM",
        status=VehicleStatus.RENTED,
        insurance_expiry=_add_years(today, 2),
        next_maintenance=_add_years(today, 1),
        technical_inspection_expiry=_add_years(today, 2),
        current_mileage=8000,
        owner_id=owner.id,
        purchase_value=Decimal("15500000"),
        purchase_date=datetime.date(2023, 2, 1),
        amortization_rate=Decimal("22"),
    )

    moussa = Client(
        name="Moussa Diop",
        phone="+221 78 987 65 43",
        email="moussa.diop@client.com",
        license_number="PERMIS-DK-2020-001",
        notes="Client fidèle, très soigneux avec les véhicules.",
    )
    aissatou = Client(
        name="Aïssatou Gueye",
        phone="+221 76 555 44 33",
        email="aissatou.gueye@client.com",
        license_number="PERMIS-DK-2021-002",
    )

    reserved_rental = Rental(
        vehicle_id=yaris.id,
        client_id=moussa.id,
        customer_name=moussa.name,
        start_date=today,
        end_date=today + days(7),
        price=Decimal("175000"),
        status=RentalStatus.RESERVED,
        payments=[Payment(date=today, amount=Decimal("50000"))],
    )
    active_rental = Rental(
        vehicle_id=tucson.id,
        client_id=aissatou.id,
        customer_name=aissatou.name,
        start_date=today - days(3),
        end_date=today + days(10),
        price=Decimal("325000"),
        status=RentalStatus.ACTIVE,
        payments=[Payment(date=today, amount=Decimal("325000"))],
    )
    for rental in (reserved_rental, active_rental):
        rental.recompute_balance()

    accident = Accident(
        vehicle_id=clio.id,
        rental_id=active_rental.id,
        date=today - days(20),
        description="Pare-choc avant heurté sur un parking. Rayures profondes.",
        severity=AccidentSeverity.LIGHT,
        estimated_cost=Decimal("150000"),
        status=AccidentStatus.REPAIRED,
        final_cost=Decimal("135000"),
        replaced_parts="Pare-choc avant",
    )

    state.owners[owner.id] = owner
    for vehicle in (yaris, peugeot, clio, tucson):
        state.vehicles[vehicle.id] = vehicle
    for client in (moussa, aissatou):
        state.clients[client.id] = client
    for rental in (reserved_rental, active_rental):
        state.rentals[rental.id] = rental
    state.accidents[accident.id] = accident

    logger.debug("Dati di esempio inseriti (riferimento %s)", today.isoformat())
