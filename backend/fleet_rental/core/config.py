"""
Configurazione applicazione - Settings
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce le impostazioni dell'applicazione caricate da variabili d'ambiente.
"""


from __future__ import annotations
import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configurazione applicazione.

    Carica le impostazioni da variabili d'ambiente.
    Valori di default adatti per sviluppo locale.

    Per ottenere un'istanza singleton:
    - In FastAPI: usa `Depends(get_settings)` per Dependency Injection
    - Altrove: usa `get_settings()` direttamente
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------
    # Configurazione Applicazione
    # ------------------------------------------------------------
    app_name: str = Field(
        default="Fleet Rental Manager",
        description="Nome applicazione",
    )

    app_version: str = Field(
        default="1.0.0",
        description="Versione applicazione",
    )

    app_env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Ambiente di esecuzione (development | production | testing)",
    )

    debug: bool = Field(
        default=False,
        description="Modalità debug",
    )

    backend_port: int = Field(
        default=8000,
        description="Porta backend",
    )

    # ------------------------------------------------------------
    # Configurazione CORS
    # ------------------------------------------------------------
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Origini CORS permesse",
    )

    # ------------------------------------------------------------
    # Configurazione Logging
    # ------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Livello logging",
    )

    # ------------------------------------------------------------
    # Configurazione Stato / Persistenza
    # ------------------------------------------------------------
    data_file: Optional[Path] = Field(
        default=None,
        description="File JSON per lo snapshot dello stato (None = solo sessione)",
    )

    seed_sample_data: bool = Field(
        default=True,
        description="Popola lo stato con i dati di esempio se non esiste uno snapshot",
    )

    # ------------------------------------------------------------
    # Regole di business
    # ------------------------------------------------------------
    alert_horizon_days: int = Field(
        default=30,
        ge=0,
        description="Orizzonte in giorni per gli avvisi di scadenza",
    )

    strict_rental_transitions: bool = Field(
        default=False,
        description="Se True consente solo transizioni di noleggio in avanti",
    )

    loyalty_vip_rentals_threshold: int = Field(
        default=5,
        description="Numero di noleggi da superare (esclusivo) per il livello VIP",
    )

    loyalty_vip_spend_threshold: Decimal = Field(
        default=Decimal("500000"),
        description="Spesa totale da superare (esclusiva) per il livello VIP",
    )

    loyalty_loyal_min_rentals: int = Field(
        default=3,
        description="Numero minimo di noleggi per il livello Fidèle",
    )

    loyalty_loyal_spend_threshold: Decimal = Field(
        default=Decimal("200000"),
        description="Spesa totale da superare (esclusiva) per il livello Fidèle",
    )

    # ------------------------------------------------------------
    # Configurazione Documenti (contratti e report)
    # ------------------------------------------------------------
    currency: str = Field(
        default="FCFA",
        description="Valuta usata nei documenti e negli export",
    )

    company_name: str = Field(
        default="CARMIXT APPS",
        description="Ragione sociale del noleggiatore",
    )

    company_address: str = Field(
        default="Dakar, Sénégal",
        description="Indirizzo del noleggiatore",
    )

    @property
    def is_production(self) -> bool:
        """Verifica se l'applicazione è in produzione."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Verifica se l'applicazione è in sviluppo."""
        return self.app_env == "development"

    # ------------------------------------------------------------
    # Validatori
    # ------------------------------------------------------------

    @field_validator(
        "loyalty_vip_spend_threshold", "loyalty_loyal_spend_threshold", mode="before"
    )
    @classmethod
    def convert_decimal_from_string(cls, v) -> Decimal:
        """Gestisce input con virgola convertendolo in punto."""
        if v is None:
            return v
        if isinstance(v, str):
            v = v.replace(",", ".")
        return Decimal(str(v))

    @field_validator("data_file")
    @classmethod
    def validate_data_file(cls, v: Optional[Path]) -> Optional[Path]:
        """Emette warning se il path è relativo."""
        if v is not None and not v.is_absolute():
            logging.getLogger(__name__).warning(
                "data_file è relativo: %s. Usa un percorso assoluto in produzione.", v
            )
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validazione settings obbligatori in produzione."""
        if self.app_env != "production":
            return self

        errors = []

        if self.debug:
            errors.append("- debug: deve essere False in produzione")

        for origin in self.cors_origins:
            if "localhost" in origin or "127.0.0.1" in origin:
                errors.append(
                    f"- cors_origins: l'origine '{origin}' non è consentita in produzione"
                )

        if errors:
            error_msg = "Errore di configurazione in produzione:\n" + "\n".join(errors)
            raise ValueError(error_msg)

        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Restituisce l'istanza singleton delle impostazioni.

    In fase di test, usa get_settings.cache_clear() per resettare.

    Returns:
        Settings: Istanza delle impostazioni applicazione
    """
    return Settings()


# Istanza singleton delle impostazioni per uso diretto in modulo
settings = get_settings()
