"""
Layer di validazione delle regole di business
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Ogni funzione `validate_*` restituisce un risultato esplicito:
- Ok(): i dati rispettano le regole
- Invalid(reasons=[...]): elenco dei motivi di rifiuto (in francese,
  mostrati così come sono all'utente)

I service convertono Invalid in BusinessValidationError con
`ensure_valid()`. Gli errori di formato/tipo restano a carico di Pydantic.
"""

import datetime
import logging
import re
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from fleet_rental.core.config import settings
from fleet_rental.core.exceptions import BusinessValidationError
from fleet_rental.models import Driver, Rental, Vehicle
from fleet_rental.schemas.expense import EXPENSE_CATEGORIES
from fleet_rental.schemas.rental import (
    RENTAL_STATUS_LABELS,
    VALID_RENTAL_TRANSITIONS,
    RentalStatus,
)
from fleet_rental.schemas.vehicle import VehicleStatus

# Logger per questo modulo
logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^\+?\d{7,}$")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


# -------------------------------------------------------------------
# Risultato della validazione
# -------------------------------------------------------------------

class Ok(BaseModel):
    """Validazione superata."""

    kind: Literal["ok"] = "ok"

    @property
    def is_valid(self) -> bool:
        return True


class Invalid(BaseModel):
    """Validazione fallita, con i motivi."""

    kind: Literal["invalid"] = "invalid"
    reasons: list[str] = Field(..., min_length=1)

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = Annotated[Union[Ok, Invalid], Field(discriminator="kind")]


def _result(reasons: list[str]) -> ValidationResult:
    return Invalid(reasons=reasons) if reasons else Ok()


def ensure_valid(result: ValidationResult, detail: str) -> None:
    """
    Converte un risultato Invalid in BusinessValidationError.

    Args:
        result: Esito della validazione
        detail: Messaggio principale dell'errore

    Raises:
        BusinessValidationError: Con `extra["reasons"]` se il risultato è Invalid
    """
    if isinstance(result, Invalid):
        logger.warning("%s: %s", detail, "; ".join(result.reasons))
        raise BusinessValidationError.from_reasons(detail, result.reasons)


# -------------------------------------------------------------------
# Noleggi e pagamenti
# -------------------------------------------------------------------

def validate_rental(
    vehicle: Vehicle,
    start_date: datetime.date,
    end_date: datetime.date,
    price: Decimal,
    driver: Optional[Driver] = None,
) -> ValidationResult:
    """
    Regole per la creazione di un noleggio.

    Il veicolo deve essere disponibile, l'eventuale autista libero,
    il prezzo positivo e la data di fine non precedente all'inizio.
    """
    reasons = []

    if price <= 0:
        reasons.append("Le prix doit être supérieur à zéro.")
    if end_date < start_date:
        reasons.append("La date de fin doit être postérieure ou égale à la date de début.")
    if vehicle.status != VehicleStatus.AVAILABLE:
        reasons.append(f"Le véhicule {vehicle.label} n'est pas disponible.")
    if driver is not None and not driver.is_available:
        reasons.append(f"Le chauffeur {driver.name} n'est pas disponible.")

    return _result(reasons)


def validate_payment(rental: Rental, amount: Decimal) -> ValidationResult:
    """Un pagamento deve essere positivo e non superare il saldo residuo."""
    reasons = []

    if amount <= 0:
        reasons.append("Le montant doit être supérieur à zéro.")
    elif amount > rental.balance_due:
        reasons.append(
            f"Le montant dépasse le solde restant ({rental.balance_due} {settings.currency})."
        )

    return _result(reasons)


def validate_rental_transition(
    current: RentalStatus,
    target: RentalStatus,
    strict: bool,
) -> ValidationResult:
    """
    Controlla una transizione di stato del noleggio.

    In modalità standard ogni transizione è ammessa; in modalità
    strict solo quelle in VALID_RENTAL_TRANSITIONS.
    """
    if not strict or current == target:
        return Ok()
    if target in VALID_RENTAL_TRANSITIONS[current]:
        return Ok()
    return Invalid(
        reasons=[
            f"Transition de statut non autorisée : "
            f"{RENTAL_STATUS_LABELS[current]} → {RENTAL_STATUS_LABELS[target]}."
        ]
    )


# -------------------------------------------------------------------
# Anagrafiche
# -------------------------------------------------------------------

def validate_vehicle(
    purchase_value: Decimal,
    purchase_date: datetime.date,
    insurance_expiry: Optional[datetime.date] = None,
    technical_inspection_expiry: Optional[datetime.date] = None,
    next_maintenance: Optional[datetime.date] = None,
    today: Optional[datetime.date] = None,
) -> ValidationResult:
    """
    Regole per la registrazione di un veicolo.

    La data di acquisto non può essere futura; le scadenze non
    possono essere già passate al momento della registrazione.
    """
    today = today or datetime.date.today()
    reasons = []

    if purchase_value <= 0:
        reasons.append("La valeur d'achat doit être supérieure à zéro.")
    if purchase_date > today:
        reasons.append("La date d'achat ne peut être dans le futur.")
    if insurance_expiry is not None and insurance_expiry < today:
        reasons.append("La date d'expiration de l'assurance ne peut être dans le passé.")
    if technical_inspection_expiry is not None and technical_inspection_expiry < today:
        reasons.append("La date d'expiration de la visite technique ne peut être dans le passé.")
    if next_maintenance is not None and next_maintenance < today:
        reasons.append("La date de maintenance ne peut être dans le passé.")

    return _result(reasons)


def validate_client(
    name: str,
    phone: str,
    email: str,
    license_number: str,
) -> ValidationResult:
    """Campi obbligatori e formato di telefono/email del cliente."""
    reasons = []

    if not name.strip():
        reasons.append("Le nom est requis.")

    if not phone.strip():
        reasons.append("Le téléphone est requis.")
    elif not PHONE_PATTERN.match(phone.replace(" ", "")):
        reasons.append("Le format du téléphone est invalide.")

    if not email.strip():
        reasons.append("L'email est requis.")
    elif not EMAIL_PATTERN.search(email):
        reasons.append("Le format de l'email est invalide.")

    if not license_number.strip():
        reasons.append("Le numéro de permis est requis.")

    return _result(reasons)


def validate_driver(name: str, phone: str, license_number: str) -> ValidationResult:
    reasons = []

    if not name.strip():
        reasons.append("Le nom est requis.")
    if not phone.strip():
        reasons.append("Le téléphone est requis.")
    if not license_number.strip():
        reasons.append("Le numéro de permis est requis.")

    return _result(reasons)


def validate_owner(name: str, phone: str, email: str) -> ValidationResult:
    reasons = []

    if not name.strip():
        reasons.append("Le nom est requis.")
    if not phone.strip():
        reasons.append("Le téléphone est requis.")
    if email.strip() and not EMAIL_PATTERN.search(email):
        reasons.append("Le format de l'email est invalide.")

    return _result(reasons)


def validate_affiliate(name: str, commission_rate: Decimal) -> ValidationResult:
    reasons = []

    if not name.strip():
        reasons.append("Le nom est requis.")
    if not Decimal("0") <= commission_rate <= Decimal("100"):
        reasons.append("La commission doit être comprise entre 0 et 100 %.")

    return _result(reasons)


# -------------------------------------------------------------------
# Eventi sui veicoli e spese
# -------------------------------------------------------------------

def validate_maintenance(description: str, cost: Decimal) -> ValidationResult:
    reasons = []

    if not description.strip():
        reasons.append("La description est requise.")
    if cost < 0:
        reasons.append("Le coût ne peut pas être négatif.")

    return _result(reasons)


def validate_accident(
    description: str,
    estimated_cost: Decimal,
    final_cost: Optional[Decimal] = None,
) -> ValidationResult:
    reasons = []

    if not description.strip():
        reasons.append("La description est requise.")
    if estimated_cost < 0:
        reasons.append("Le coût estimé ne peut pas être négatif.")
    if final_cost is not None and final_cost < 0:
        reasons.append("Le coût final ne peut pas être négatif.")

    return _result(reasons)


def validate_contravention(description: str, amount: Decimal) -> ValidationResult:
    reasons = []

    if not description.strip():
        reasons.append("La description est requise.")
    if amount <= 0:
        reasons.append("Le montant doit être supérieur à zéro.")

    return _result(reasons)


def validate_expense(description: str, category: str, amount: Decimal) -> ValidationResult:
    """Le spese richiedono descrizione, importo positivo e una categoria nota."""
    reasons = []

    if not description.strip():
        reasons.append("La description est requise.")
    if amount <= 0:
        reasons.append("Le montant doit être supérieur à zéro.")
    if category not in EXPENSE_CATEGORIES:
        reasons.append(
            f"Catégorie inconnue : {category}. "
            f"Catégories possibles : {', '.join(EXPENSE_CATEGORIES)}."
        )

    return _result(reasons)
