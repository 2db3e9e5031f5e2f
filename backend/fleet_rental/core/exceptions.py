"""
Eccezioni applicative del gestionale noleggio.
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Ogni eccezione porta il proprio status HTTP e il proprio error_code e si
serializza nel corpo JSON restituito dall'handler registrato in main.py:

    {"detail": "...", "error_code": "...", "extra": {...}}

NOTA: BusinessValidationError non è pydantic.ValidationError.
- pydantic.ValidationError: formato/tipo dei dati in input (FastAPI → 422)
- BusinessValidationError: regole del registro noleggi violate, con
  l'elenco dei motivi in `extra["reasons"]` (nostro handler → 422)
"""

import uuid
from typing import Any, Dict, Iterable, List, Optional, Union

__all__ = [
    "AppException",
    "NotFoundError",
    "DuplicateError",
    "BusinessValidationError",
    "ConflictError",
    "ResourceInUseError",
]

EntityId = Union[uuid.UUID, str]


class AppException(Exception):
    """
    Base delle eccezioni applicative.

    Attributes:
        status_code: Status HTTP della risposta
        error_code: Codice stabile letto dal frontend
        detail: Messaggio per l'operatore (in francese)
        extra: Dati strutturati: motivi del rifiuto, id coinvolti
    """

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "Erreur interne du serveur"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.detail = detail or self.default_detail
        self.error_code = error_code or type(self).error_code
        self.extra = extra
        self.status_code = type(self).status_code
        super().__init__(self.detail)

    def to_content(self) -> Dict[str, Any]:
        """Corpo JSON della risposta. `extra` compare solo se valorizzato."""
        content: Dict[str, Any] = {"detail": self.detail, "error_code": self.error_code}
        if self.extra:
            content["extra"] = self.extra
        return content


class NotFoundError(AppException):
    """Entità (veicolo, cliente, noleggio, ...) assente dallo stato."""

    status_code: int = 404
    error_code: str = "RESOURCE_NOT_FOUND"
    default_detail: str = "Ressource introuvable"

    @classmethod
    def for_entity(cls, label: str, entity_id: EntityId) -> "NotFoundError":
        """
        Errore per un'entità mancante.

        Args:
            label: Nome dell'entità mostrato all'utente (es. "Véhicule")
            entity_id: Identificativo cercato, riportato in `extra["entity_id"]`
        """
        return cls(
            f"{label} {entity_id} introuvable",
            extra={"entity_id": str(entity_id)},
        )


class DuplicateError(AppException):
    """Violazione di unicità, es. targa già registrata."""

    status_code: int = 409
    error_code: str = "DUPLICATE_RESOURCE"
    default_detail: str = "Ressource déjà existante"


class BusinessValidationError(ValueError, AppException):
    """
    Regole di business violate.

    Eredita da ValueError per essere catturata dai validatori Pydantic.
    Costruita da un risultato Invalid tramite `from_reasons`, porta
    l'elenco completo dei motivi, es.:
        - "Le prix doit être supérieur à zéro."
        - "Le véhicule Toyota Yaris n'est pas disponible."
    """

    status_code: int = 422
    error_code: str = "BUSINESS_VALIDATION_ERROR"
    default_detail: str = "Validation des données échouée"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Salta ValueError.__init__: il messaggio lo imposta AppException
        AppException.__init__(self, detail, error_code, extra)

    @classmethod
    def from_reasons(
        cls, detail: str, reasons: Iterable[str]
    ) -> "BusinessValidationError":
        return cls(detail, extra={"reasons": list(reasons)})

    @property
    def reasons(self) -> List[str]:
        """Motivi del rifiuto; vuoto se l'errore non nasce da un Invalid."""
        return list((self.extra or {}).get("reasons", []))


class ConflictError(AppException):
    """Operazione incompatibile con lo stato corrente della risorsa."""

    status_code: int = 409
    error_code: str = "CONFLICT_STATE"
    default_detail: str = "Conflit d'état"


class ResourceInUseError(ConflictError):
    """
    Eliminazione rifiutata: altre entità dipendono dalla risorsa.

    Gli id che bloccano finiscono in `extra[blocking_key]`:
    `rental_ids` per veicoli, clienti e autisti con noleggi non
    terminati, `vehicle_ids` per i proprietari con veicoli.
    """

    def __init__(
        self,
        detail: str,
        blocking_key: str,
        blocking_ids: Iterable[EntityId],
    ) -> None:
        self.blocking_ids = [str(i) for i in blocking_ids]
        super().__init__(detail, extra={blocking_key: self.blocking_ids})
