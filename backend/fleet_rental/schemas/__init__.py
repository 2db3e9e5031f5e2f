"""
Schemas Pydantic per il progetto Fleet Rental Manager

Questo modulo contiene gli schemi Pydantic utilizzati per la validazione
degli input e la serializzazione delle risposte API.
"""

# Import degli schemi per renderli disponibili tramite import diretto
# es: from fleet_rental.schemas import VehicleRead, RentalRead, etc.

from fleet_rental.schemas.accounting import (
    FinancialReport,
    FinancialSummary,
    MonthlyRevenue,
    ReportPeriod,
    Transaction,
    TransactionType,
    VehicleFinancials,
    VehicleProfitability,
    VehicleRevenue,
)
from fleet_rental.schemas.client import (
    ClientCreate,
    ClientDetail,
    ClientList,
    ClientLoyalty,
    ClientRead,
    ClientUpdate,
    LoyaltyTier,
)
from fleet_rental.schemas.contravention import (
    ContraventionCreate,
    ContraventionRead,
    ContraventionStatus,
    ContraventionStatusUpdate,
)
from fleet_rental.schemas.dashboard import (
    CalendarEvent,
    CalendarEventType,
    CalendarMonth,
    DashboardStats,
    DeadlineKind,
    FleetAlert,
)
from fleet_rental.schemas.driver import DriverAvailabilityUpdate, DriverCreate, DriverRead
from fleet_rental.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from fleet_rental.schemas.history import HistoryEntity, HistoryLogRead
from fleet_rental.schemas.maintenance import (
    AccidentCreate,
    AccidentRead,
    AccidentSeverity,
    AccidentStatus,
    AccidentStatusUpdate,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceStatus,
    MaintenanceStatusUpdate,
)
from fleet_rental.schemas.partner import AffiliateCreate, AffiliateRead, OwnerCreate, OwnerRead
from fleet_rental.schemas.rental import (
    PaymentCreate,
    PaymentRead,
    RentalCreate,
    RentalList,
    RentalRead,
    RentalStatus,
    RentalStatusUpdate,
)
from fleet_rental.schemas.vehicle import (
    VehicleBase,
    VehicleCreate,
    VehicleList,
    VehicleRead,
    VehicleStatus,
    VehicleStatusUpdate,
    VehicleUpdate,
)

__all__ = [
    # Contabilità
    "FinancialReport",
    "FinancialSummary",
    "MonthlyRevenue",
    "ReportPeriod",
    "Transaction",
    "TransactionType",
    "VehicleFinancials",
    "VehicleProfitability",
    "VehicleRevenue",
    # Clienti
    "ClientCreate",
    "ClientDetail",
    "ClientList",
    "ClientLoyalty",
    "ClientRead",
    "ClientUpdate",
    "LoyaltyTier",
    # Contravvenzioni
    "ContraventionCreate",
    "ContraventionRead",
    "ContraventionStatus",
    "ContraventionStatusUpdate",
    # Dashboard e avvisi
    "CalendarEvent",
    "CalendarEventType",
    "CalendarMonth",
    "DashboardStats",
    "DeadlineKind",
    "FleetAlert",
    # Autisti
    "DriverAvailabilityUpdate",
    "DriverCreate",
    "DriverRead",
    # Spese
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseUpdate",
    # Storico
    "HistoryEntity",
    "HistoryLogRead",
    # Manutenzioni e sinistri
    "AccidentCreate",
    "AccidentRead",
    "AccidentSeverity",
    "AccidentStatus",
    "AccidentStatusUpdate",
    "MaintenanceCreate",
    "MaintenanceRead",
    "MaintenanceStatus",
    "MaintenanceStatusUpdate",
    # Proprietari e partner
    "AffiliateCreate",
    "AffiliateRead",
    "OwnerCreate",
    "OwnerRead",
    # Noleggi
    "PaymentCreate",
    "PaymentRead",
    "RentalCreate",
    "RentalList",
    "RentalRead",
    "RentalStatus",
    "RentalStatusUpdate",
    # Veicoli
    "VehicleBase",
    "VehicleCreate",
    "VehicleList",
    "VehicleRead",
    "VehicleStatus",
    "VehicleStatusUpdate",
    "VehicleUpdate",
]
