"""
API tests with the FastAPI TestClient.

Verificano il cablaggio HTTP: codici di stato, corpo degli errori
applicativi (detail, error_code, extra) e formati di export.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

from fleet_rental.services.export_service import BOM, CSV_FILENAME

API = "/api/v1"


def vehicle_payload(owner, today, **overrides):
    payload = {
        "make": "Peugeot",
        "model": "208",
        "year": 2021,
        "plate": "bc 456 de",
        "owner_id": str(owner.id),
        "purchase_value": "9200000",
        "purchase_date": "2021-03-20",
        "insurance_expiry": (today + timedelta(days=60)).isoformat(),
    }
    payload.update(overrides)
    return payload


def rental_payload(vehicle, client, today, **overrides):
    payload = {
        "vehicle_id": str(vehicle.id),
        "client_id": str(client.id),
        "start_date": today.isoformat(),
        "end_date": (today + timedelta(days=7)).isoformat(),
        "price": "175000",
    }
    payload.update(overrides)
    return payload


# ============================================================
# Sistema
# ============================================================


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# ============================================================
# Veicoli
# ============================================================


class TestVehiclesApi:
    """Tests for /vehicles."""

    def test_create_vehicle(self, api_client, owner, today):
        response = api_client.post(f"{API}/vehicles/", json=vehicle_payload(owner, today))

        assert response.status_code == 201
        body = response.json()
        assert body["plate"] == "BC456DE"
        assert body["status"] == "available"
        assert body["label"] == "Peugeot 208"

    def test_duplicate_plate(self, api_client, owner, today):
        api_client.post(f"{API}/vehicles/", json=vehicle_payload(owner, today))

        response = api_client.post(f"{API}/vehicles/", json=vehicle_payload(owner, today))

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    def test_past_expiry_returns_reasons(self, api_client, owner, today):
        payload = vehicle_payload(
            owner, today, insurance_expiry=(today - timedelta(days=3)).isoformat()
        )

        response = api_client.post(f"{API}/vehicles/", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "BUSINESS_VALIDATION_ERROR"
        assert body["extra"]["reasons"] == [
            "La date d'expiration de l'assurance ne peut être dans le passé."
        ]

    def test_invalid_plate_format(self, api_client, owner, today):
        """Test errore di formato gestito da Pydantic (422 senza error_code)."""
        response = api_client.post(
            f"{API}/vehicles/", json=vehicle_payload(owner, today, plate="A")
        )

        assert response.status_code == 422
        assert "error_code" not in response.json()

    def test_unknown_vehicle(self, api_client):
        response = api_client.get(f"{API}/vehicles/00000000-0000-0000-0000-000000000009")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "RESOURCE_NOT_FOUND"
        assert body["extra"] == {"entity_id": "00000000-0000-0000-0000-000000000009"}
        assert body["detail"].endswith("introuvable")

    def test_list_filters_by_status(self, api_client, vehicle, make_vehicle):
        make_vehicle(status="maintenance")

        response = api_client.get(f"{API}/vehicles/", params={"status": "maintenance"})

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_delete_with_open_rental(self, api_client, rental, vehicle):
        response = api_client.delete(f"{API}/vehicles/{vehicle.id}")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "CONFLICT_STATE"
        assert body["extra"]["rental_ids"] == [str(rental.id)]

    def test_financials(self, api_client, vehicle, rental):
        response = api_client.get(f"{API}/vehicles/{vehicle.id}/financials")

        assert response.status_code == 200
        assert Decimal(response.json()["total_revenue"]) == Decimal("175000")


# ============================================================
# Noleggi
# ============================================================


class TestRentalsApi:
    """Tests for /rentals."""

    def test_create_and_pay(self, api_client, vehicle, client, today):
        created = api_client.post(f"{API}/rentals/", json=rental_payload(vehicle, client, today))
        assert created.status_code == 201
        rental_id = created.json()["id"]

        paid = api_client.post(f"{API}/rentals/{rental_id}/payments", json={"amount": "50000"})

        assert paid.status_code == 201
        body = paid.json()
        assert Decimal(body["amount_paid"]) == Decimal("50000")
        assert Decimal(body["balance_due"]) == Decimal("125000")

    def test_overpayment_is_rejected(self, api_client, rental, state):
        response = api_client.post(
            f"{API}/rentals/{rental.id}/payments", json={"amount": "200000"}
        )

        assert response.status_code == 422
        assert response.json()["extra"]["reasons"][0].startswith("Le montant dépasse")
        assert state.rentals[rental.id].payments == []

    def test_unavailable_vehicle(self, api_client, rental, vehicle, client, today):
        response = api_client.post(f"{API}/rentals/", json=rental_payload(vehicle, client, today))

        assert response.status_code == 422
        assert any(
            "n'est pas disponible" in reason
            for reason in response.json()["extra"]["reasons"]
        )

    def test_status_transition(self, api_client, rental, state, vehicle):
        response = api_client.patch(
            f"{API}/rentals/{rental.id}/status", json={"status": "completed"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert state.vehicles[vehicle.id].status == "available"

    def test_contract_pdf(self, api_client, rental):
        html_cls = MagicMock()
        html_cls.return_value.write_pdf.return_value = b"%PDF-1.7 fake"

        with patch(
            "fleet_rental.services.pdf_service._get_weasyprint",
            return_value=(html_cls, MagicMock()),
        ):
            response = api_client.get(f"{API}/rentals/{rental.id}/contract.pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert f"contrat-{rental.id}.pdf" in response.headers["content-disposition"]
        assert response.content == b"%PDF-1.7 fake"


# ============================================================
# Clienti
# ============================================================


class TestClientsApi:
    """Tests for /clients."""

    def test_invalid_phone(self, api_client):
        response = api_client.post(
            f"{API}/clients/",
            json={
                "name": "Fatou Ndiaye",
                "phone": "12",
                "email": "fatou@client.com",
                "license_number": "P-3",
            },
        )

        assert response.status_code == 422
        assert response.json()["extra"]["reasons"] == ["Le format du téléphone est invalide."]

    def test_detail_with_loyalty(self, api_client, client, rental):
        response = api_client.get(f"{API}/clients/{client.id}")

        assert response.status_code == 200
        assert response.json()["loyalty"]["rental_count"] == 1
        assert response.json()["loyalty"]["tier"] == "nouveau"


# ============================================================
# Contabilità, avvisi, comandi
# ============================================================


class TestAccountingApi:
    """Tests for /accounting."""

    def test_transactions_csv(self, api_client, state, rental):
        api_client.post(f"{API}/rentals/{rental.id}/payments", json={"amount": "50000"})

        response = api_client.get(f"{API}/accounting/transactions.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert CSV_FILENAME in response.headers["content-disposition"]
        assert response.content.startswith(BOM.encode("utf-8"))
        lines = response.content.decode("utf-8-sig").split("\n")
        assert lines[0] == "Date,Description,Montant (FCFA),Type,Catégorie"
        assert len(lines) == 2

    def test_summary(self, api_client, rental):
        api_client.post(f"{API}/rentals/{rental.id}/payments", json={"amount": "50000"})

        response = api_client.get(f"{API}/accounting/summary", params={"period": "all"})

        assert response.status_code == 200
        assert Decimal(response.json()["revenue"]) == Decimal("50000")


class TestAlertsApi:
    """Tests for /alerts."""

    def test_alerts_within_horizon(self, api_client, make_vehicle, today):
        soon = make_vehicle(insurance_expiry=today + timedelta(days=3))

        response = api_client.get(f"{API}/alerts/")

        assert response.status_code == 200
        alerts = response.json()
        assert [a["vehicle_id"] for a in alerts] == [str(soon.id)]
        assert alerts[0]["days_left"] == 3

    def test_custom_horizon(self, api_client, vehicle):
        response = api_client.get(f"{API}/alerts/", params={"horizon_days": 365})

        assert len(response.json()) == 3


class TestCommandsApi:
    """Tests for /commands."""

    def test_record_payment_command(self, api_client, rental):
        response = api_client.post(
            f"{API}/commands/",
            json={"type": "record_payment", "rental_id": str(rental.id), "amount": "25000"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "record_payment"
        assert body["entity_id"] == str(rental.id)
        assert Decimal(body["result"]["amount_paid"]) == Decimal("25000")

    def test_delete_command(self, api_client, rental, state):
        response = api_client.post(
            f"{API}/commands/",
            json={"type": "delete_rental", "rental_id": str(rental.id)},
        )

        assert response.status_code == 200
        assert response.json() == {"type": "delete_rental", "entity_id": None, "result": None}
        assert state.rentals == {}

    def test_unknown_command_type(self, api_client):
        response = api_client.post(f"{API}/commands/", json={"type": "nope"})

        assert response.status_code == 422
