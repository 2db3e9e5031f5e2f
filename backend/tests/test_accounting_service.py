"""
Unit tests for accounting, fleet financials, loyalty and CSV export.
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from fleet_rental.models import Contravention, Expense, MaintenanceRecord
from fleet_rental.schemas.accounting import ReportPeriod, Transaction, TransactionType
from fleet_rental.schemas.client import LoyaltyTier
from fleet_rental.schemas.contravention import ContraventionStatus
from fleet_rental.schemas.maintenance import MaintenanceStatus
from fleet_rental.schemas.rental import RentalCreate
from fleet_rental.services.accounting_service import accounting_service, in_period, loyalty_tier
from fleet_rental.services.export_service import BOM, export_service
from fleet_rental.services.fleet_report_service import (
    current_value,
    depreciation,
    fleet_report_service,
)
from fleet_rental.services.rental_service import rental_service

REFERENCE_DAY = date(2025, 6, 15)


def create_rental(state, vehicle, client, price, start=REFERENCE_DAY):
    return rental_service.create(
        state,
        RentalCreate(
            vehicle_id=vehicle.id,
            client_id=client.id,
            start_date=start,
            end_date=start + timedelta(days=3),
            price=Decimal(price),
        ),
    )


def add_maintenance(state, vehicle, cost, status=MaintenanceStatus.COMPLETED, day=REFERENCE_DAY):
    record = MaintenanceRecord(
        vehicle_id=vehicle.id,
        description="Vidange",
        date=day,
        cost=Decimal(cost),
        status=status,
    )
    state.maintenance_records[record.id] = record
    return record


@pytest.fixture
def ledger_state(state, vehicle, client):
    """Stato con due pagamenti, due manutenzioni (una completata) e una spesa."""
    rental = create_rental(state, vehicle, client, "175000")
    rental_service.record_payment(state, rental.id, Decimal("50000"), date(2025, 6, 10))
    rental_service.record_payment(state, rental.id, Decimal("25000"), date(2025, 5, 2))

    add_maintenance(state, vehicle, "30000", day=date(2025, 6, 5))
    add_maintenance(state, vehicle, "99000", status=MaintenanceStatus.TODO, day=date(2025, 6, 6))

    expense = Expense(
        date=date(2025, 6, 1),
        description="Plein",
        category="Carburant",
        amount=Decimal("10000"),
    )
    state.expenses[expense.id] = expense
    return state


# ============================================================
# Registro movimenti
# ============================================================


class TestTransactions:
    """Tests for the derived transaction ledger."""

    def test_ledger_content_and_order(self, ledger_state):
        """Test un ricavo per pagamento, costi solo per manutenzioni completate e spese."""
        transactions = accounting_service.get_transactions(ledger_state)

        assert [t.date for t in transactions] == [
            date(2025, 6, 10),
            date(2025, 6, 5),
            date(2025, 6, 1),
            date(2025, 5, 2),
        ]
        assert [t.amount for t in transactions] == [
            Decimal("50000"),
            Decimal("-30000"),
            Decimal("-10000"),
            Decimal("25000"),
        ]

    def test_revenue_rows(self, ledger_state):
        revenue = [
            t for t in accounting_service.get_transactions(ledger_state)
            if t.type == TransactionType.REVENUE
        ]

        assert all(t.category == "Revenu" for t in revenue)
        assert revenue[0].description == "Paiement Location Moussa Diop"
        assert all(t.is_editable is False for t in revenue)

    def test_only_expenses_are_editable(self, ledger_state):
        editable = [t for t in accounting_service.get_transactions(ledger_state) if t.is_editable]

        assert len(editable) == 1
        assert editable[0].description == "Carburant: Plein"

    def test_filter_by_type_and_search(self, ledger_state):
        transactions = accounting_service.get_transactions(ledger_state)

        costs = accounting_service.filter_transactions(transactions, type=TransactionType.COST)
        found = accounting_service.filter_transactions(transactions, search="VIDANGE")

        assert len(costs) == 2
        assert [t.category for t in found] == ["Maintenance"]

    def test_filter_by_period(self, ledger_state):
        """Test this_month esclude il pagamento di maggio."""
        transactions = accounting_service.get_transactions(ledger_state)

        june = accounting_service.filter_transactions(
            transactions, period=ReportPeriod.THIS_MONTH, today=REFERENCE_DAY
        )

        assert len(june) == 3

    def test_in_period(self):
        assert in_period(date(2025, 1, 1), ReportPeriod.THIS_YEAR, REFERENCE_DAY) is True
        assert in_period(date(2024, 12, 31), ReportPeriod.THIS_YEAR, REFERENCE_DAY) is False
        assert in_period(date(2000, 1, 1), ReportPeriod.ALL, REFERENCE_DAY) is True


# ============================================================
# Riepiloghi
# ============================================================


class TestSummaries:
    """Tests for summaries and revenue aggregations."""

    def test_summary_all(self, ledger_state):
        summary = accounting_service.get_summary(ledger_state)

        assert summary.revenue == Decimal("75000")
        assert summary.costs == Decimal("40000")
        assert summary.net_profit == Decimal("35000")

    def test_summary_this_month(self, ledger_state):
        summary = accounting_service.get_summary(
            ledger_state, ReportPeriod.THIS_MONTH, today=REFERENCE_DAY
        )

        assert summary.revenue == Decimal("50000")
        assert summary.costs == Decimal("40000")

    def test_monthly_revenue(self, ledger_state):
        monthly = accounting_service.get_monthly_revenue(ledger_state, 2025)

        assert len(monthly.months) == 12
        assert monthly.months[4] == Decimal("25000")
        assert monthly.months[5] == Decimal("50000")
        assert sum(monthly.months) == Decimal("75000")

    def test_revenue_by_vehicle_excludes_zero(self, state, vehicle, make_vehicle, client):
        """Test solo i veicoli con ricavi, in ordine decrescente."""
        other = make_vehicle(make="Peugeot", model="208")
        idle = make_vehicle(make="Renault", model="Clio")
        first = create_rental(state, vehicle, client, "100000")
        second = create_rental(state, other, client, "300000")
        rental_service.record_payment(state, first.id, Decimal("40000"))
        rental_service.record_payment(state, second.id, Decimal("90000"))

        rows = accounting_service.get_revenue_by_vehicle(state)

        assert [r.vehicle_name for r in rows] == ["Peugeot 208", "Toyota Yaris"]
        assert idle.id not in {r.vehicle_id for r in rows}

    def test_report_combines_summary_and_vehicles(self, ledger_state):
        report = accounting_service.get_report(ledger_state)

        assert report.summary.period == ReportPeriod.ALL
        assert report.revenue_by_vehicle[0].revenue == Decimal("75000")


# ============================================================
# Fedeltà clienti
# ============================================================


class TestLoyalty:
    """Tests for loyalty tiers."""

    @pytest.mark.parametrize(
        "rental_count, spend, expected",
        [
            (0, Decimal("0"), LoyaltyTier.NOUVEAU),
            (2, Decimal("200000"), LoyaltyTier.NOUVEAU),
            (3, Decimal("0"), LoyaltyTier.FIDELE),
            (2, Decimal("250000"), LoyaltyTier.FIDELE),
            (5, Decimal("0"), LoyaltyTier.FIDELE),
            (6, Decimal("0"), LoyaltyTier.VIP),
            (1, Decimal("600000"), LoyaltyTier.VIP),
        ],
    )
    def test_loyalty_tier(self, rental_count, spend, expected):
        assert loyalty_tier(rental_count, spend) == expected

    def test_thresholds_are_exclusive(self, override_settings):
        """Test le soglie *_threshold vanno superate, non solo raggiunte."""
        override_settings(
            loyalty_vip_rentals_threshold=2,
            loyalty_vip_spend_threshold=Decimal("100000"),
        )

        assert loyalty_tier(2, Decimal("0")) == LoyaltyTier.NOUVEAU
        assert loyalty_tier(3, Decimal("0")) == LoyaltyTier.VIP
        assert loyalty_tier(0, Decimal("100000")) == LoyaltyTier.NOUVEAU
        assert loyalty_tier(0, Decimal("100001")) == LoyaltyTier.VIP

    def test_client_loyalty_uses_amount_paid(self, state, vehicle, client):
        """Test la spesa totale è la somma degli importi pagati."""
        rental = create_rental(state, vehicle, client, "400000")
        rental_service.record_payment(state, rental.id, Decimal("250000"))

        loyalty = accounting_service.client_loyalty(state, client.id)

        assert loyalty.rental_count == 1
        assert loyalty.lifetime_spend == Decimal("250000")
        assert loyalty.tier == LoyaltyTier.FIDELE


# ============================================================
# Ammortamento e redditività
# ============================================================


class TestDepreciation:
    """Tests for declining-balance depreciation."""

    def test_value_at_purchase_date(self, vehicle):
        """Test alla data di acquisto il valore coincide con quello d'acquisto."""
        assert current_value(vehicle, today=vehicle.purchase_date) == vehicle.purchase_value
        assert depreciation(vehicle, today=vehicle.purchase_date) == Decimal("0")

    def test_value_after_four_years(self, vehicle):
        """Test 1.000.000 al 20% per 4 anni -> 409.600."""
        vehicle.purchase_value = Decimal("1000000")
        vehicle.purchase_date = date(2021, 1, 1)

        value = current_value(vehicle, today=date(2021, 1, 1) + timedelta(days=1461))

        assert value == Decimal("409600.00")

    def test_future_purchase_date_counts_as_zero_years(self, vehicle):
        vehicle.purchase_date = date(2030, 1, 1)

        assert current_value(vehicle, today=date(2025, 1, 1)) == vehicle.purchase_value

    def test_full_rate_gives_zero_value(self, vehicle):
        vehicle.amortization_rate = Decimal("100")

        assert current_value(vehicle, today=date(2025, 1, 1)) == Decimal("0")


class TestVehicleFinancials:
    """Tests for per-vehicle financial indicators."""

    def test_financials(self, state, vehicle, client, today):
        vehicle.purchase_date = today
        create_rental(state, vehicle, client, "300000")
        add_maintenance(state, vehicle, "40000")
        for amount, status in (
            ("15000", ContraventionStatus.PAID),
            ("20000", ContraventionStatus.UNPAID),
            ("5000", ContraventionStatus.DISPUTED),
        ):
            contravention = Contravention(
                vehicle_id=vehicle.id,
                description="Excès de vitesse",
                date=today,
                amount=Decimal(amount),
                status=status,
            )
            state.contraventions[contravention.id] = contravention

        financials = fleet_report_service.get_vehicle_financials(state, vehicle.id, today=today)

        assert financials.total_revenue == Decimal("300000")
        assert financials.maintenance_cost == Decimal("40000")
        assert financials.paid_contraventions == Decimal("15000")
        assert financials.unpaid_contraventions == Decimal("20000")
        assert financials.contraventions_cost == Decimal("40000")
        assert financials.depreciation == Decimal("0")
        assert financials.net_profitability == Decimal("220000")

    def test_least_profitable_ranking(self, state, vehicle, make_vehicle, client, today):
        """Test classifica crescente per utile netto."""
        vehicle.purchase_date = today
        other = make_vehicle(make="Peugeot", model="208", purchase_date=today)
        create_rental(state, vehicle, client, "500000")
        create_rental(state, other, client, "100000")
        add_maintenance(state, other, "150000")

        rows = fleet_report_service.get_least_profitable(state, limit=5, today=today)

        assert [r.vehicle_name for r in rows] == ["Peugeot 208", "Toyota Yaris"]
        assert rows[0].net_profit == Decimal("-50000")

    def test_least_profitable_limit(self, state, make_vehicle, today):
        for _ in range(7):
            make_vehicle()

        assert len(fleet_report_service.get_least_profitable(state, limit=5, today=today)) == 5


# ============================================================
# Export CSV
# ============================================================


class TestCsvExport:
    """Tests for the CSV export format."""

    def test_bom_and_header(self):
        content = export_service.transactions_to_csv([]).decode("utf-8")

        assert content.startswith(BOM)
        assert content[len(BOM):] == "Date,Description,Montant (FCFA),Type,Catégorie"

    def test_rows_and_quoting(self):
        """Test descrizione tra virgolette con virgolette interne raddoppiate."""
        transactions = [
            Transaction(
                id=uuid.uuid4(),
                type=TransactionType.COST,
                date=date(2025, 6, 1),
                description='Carburant: Plein "super", station A',
                amount=Decimal("-10000"),
                category="Carburant",
            ),
            Transaction(
                id=uuid.uuid4(),
                type=TransactionType.REVENUE,
                date=date(2025, 6, 10),
                description="Paiement Location Moussa Diop",
                amount=Decimal("50000"),
                category="Revenu",
            ),
        ]

        lines = export_service.transactions_to_csv(transactions).decode("utf-8").split("\n")

        assert len(lines) == 3
        assert lines[1] == '01/06/2025,"Carburant: Plein ""super"", station A",-10000,cost,Carburant'
        assert lines[2] == '10/06/2025,"Paiement Location Moussa Diop",50000,revenue,Revenu'
