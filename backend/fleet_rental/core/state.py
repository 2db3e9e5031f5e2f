"""
Stato applicativo - collezioni in memoria e snapshot JSON
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce AppState, il contenitore esplicito di tutte le entità,
la transazione con rollback e la dependency injection per FastAPI.
"""

import copy
import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import AsyncGenerator, Iterator, Optional

from pydantic import BaseModel, Field, PrivateAttr

from fleet_rental.core.config import settings
from fleet_rental.core.sample_data import seed_sample_data
from fleet_rental.models import (
    Accident,
    Affiliate,
    Client,
    Contravention,
    Driver,
    Expense,
    HistoryLog,
    MaintenanceRecord,
    Owner,
    Rental,
    Vehicle,
)

# Logger per questo modulo
logger = logging.getLogger(__name__)


# Nomi delle collezioni, nello stesso ordine dello snapshot su file
COLLECTIONS: tuple[str, ...] = (
    "vehicles",
    "rentals",
    "clients",
    "drivers",
    "owners",
    "affiliates",
    "maintenance_records",
    "accidents",
    "contraventions",
    "expenses",
    "history",
)


class AppState(BaseModel):
    """
    Stato completo dell'applicazione.

    Ogni collezione è un dict indicizzato per UUID (l'ordine di
    inserimento è preservato). Lo storico è una lista con la voce
    più recente in testa.

    Le mutazioni avvengono solo nei metodi dei service, dentro
    `transaction()`.
    """

    vehicles: dict[uuid.UUID, Vehicle] = Field(default_factory=dict)
    rentals: dict[uuid.UUID, Rental] = Field(default_factory=dict)
    clients: dict[uuid.UUID, Client] = Field(default_factory=dict)
    drivers: dict[uuid.UUID, Driver] = Field(default_factory=dict)
    owners: dict[uuid.UUID, Owner] = Field(default_factory=dict)
    affiliates: dict[uuid.UUID, Affiliate] = Field(default_factory=dict)
    maintenance_records: dict[uuid.UUID, MaintenanceRecord] = Field(default_factory=dict)
    accidents: dict[uuid.UUID, Accident] = Field(default_factory=dict)
    contraventions: dict[uuid.UUID, Contravention] = Field(default_factory=dict)
    expenses: dict[uuid.UUID, Expense] = Field(default_factory=dict)
    history: list[HistoryLog] = Field(default_factory=list)

    _dirty: bool = PrivateAttr(default=False)

    @contextmanager
    def transaction(self) -> Iterator["AppState"]:
        """
        Esegue un blocco di mutazioni in modo atomico.

        Fotografa tutte le collezioni; se il blocco solleva un'eccezione
        le ripristina e rilancia, altrimenti marca lo stato come
        modificato (da salvare).

        Example:
            with state.transaction():
                state.rentals[rental.id] = rental
                vehicle.status = VehicleStatus.RESERVED
        """
        snapshot = {name: copy.deepcopy(getattr(self, name)) for name in COLLECTIONS}
        try:
            yield self
        except Exception:
            for name, value in snapshot.items():
                setattr(self, name, value)
            logger.debug("Transazione annullata, stato ripristinato")
            raise
        self._dirty = True

    @property
    def is_dirty(self) -> bool:
        """True se ci sono modifiche non ancora salvate."""
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False


# ------------------------------------------------------------
# Persistenza su file
# ------------------------------------------------------------

def load_state(path: Path) -> AppState:
    """
    Carica lo stato da uno snapshot JSON.

    Raises:
        pydantic.ValidationError: Se il file non rispetta il formato atteso
    """
    state = AppState.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Stato caricato da %s: %d veicoli, %d noleggi",
        path,
        len(state.vehicles),
        len(state.rentals),
    )
    return state


def save_state(state: AppState, path: Path) -> None:
    """
    Scrive lo snapshot JSON dello stato.

    Scrive prima su un file temporaneo e poi lo rinomina, così un
    crash a metà scrittura non corrompe lo snapshot precedente.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    state.mark_clean()
    logger.debug("Stato salvato su %s", path)


# ------------------------------------------------------------
# Ciclo di vita
# ------------------------------------------------------------

_state: Optional[AppState] = None


def init_state(data_file: Optional[Path] = None, seed: Optional[bool] = None) -> AppState:
    """
    Inizializza lo stato applicativo.

    - Se esiste lo snapshot su file, lo carica
    - Altrimenti popola i dati di esempio (se abilitato) o parte vuoto

    Args:
        data_file: Percorso snapshot (default settings.data_file)
        seed: Popola i dati di esempio (default settings.seed_sample_data)
    """
    global _state

    data_file = data_file if data_file is not None else settings.data_file
    seed = seed if seed is not None else settings.seed_sample_data

    if data_file is not None and data_file.exists():
        _state = load_state(data_file)
    else:
        _state = AppState()
        if seed:
            seed_sample_data(_state)
            _state.mark_clean()
            logger.info("Stato inizializzato con i dati di esempio")
        else:
            logger.info("Stato inizializzato vuoto")

    return _state


def close_state() -> None:
    """
    Salva lo stato (se c'è un file configurato) e lo rilascia.

    Da chiamare durante lo shutdown dell'applicazione.
    """
    global _state

    if _state is not None and settings.data_file is not None:
        save_state(_state, settings.data_file)
        logger.info("Stato salvato su %s", settings.data_file)
    _state = None


def get_app_state() -> AppState:
    """
    Restituisce lo stato corrente.

    Raises:
        RuntimeError: Se init_state() non è stato chiamato
    """
    if _state is None:
        raise RuntimeError("Stato applicativo non inizializzato")
    return _state


async def get_state() -> AsyncGenerator[AppState, None]:
    """
    Dependency injection per FastAPI.

    Fornisce lo stato alla richiesta e, se la richiesta lo ha
    modificato con successo, salva lo snapshot su file.

    Example:
        @router.get("/vehicles")
        async def get_vehicles(state: AppState = Depends(get_state)):
            ...
    """
    state = get_app_state()
    yield state
    if state.is_dirty and settings.data_file is not None:
        save_state(state, settings.data_file)
