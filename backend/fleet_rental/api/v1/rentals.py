"""
Router FastAPI per i Noleggi
Progetto: Fleet Rental Manager (Gestionale Noleggio)

Definisce gli endpoint API per contratti, pagamenti e stati dei noleggi.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.rental import (
    PaymentCreate,
    RentalCreate,
    RentalList,
    RentalRead,
    RentalStatus,
    RentalStatusUpdate,
)
from fleet_rental.services.client_service import client_service
from fleet_rental.services.pdf_service import pdf_service
from fleet_rental.services.rental_service import rental_service
from fleet_rental.services.vehicle_service import vehicle_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/rentals",
    tags=["Noleggi"],
)


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="noleggi_lista",
    summary="Lista noleggi",
    description="Noleggi non terminati per primi, poi per data di inizio decrescente.",
    response_model=RentalList,
    status_code=status.HTTP_200_OK,
)
async def get_rentals(
    status_filter: Optional[RentalStatus] = Query(None, alias="status", description="Filtro per stato"),
    vehicle_id: Optional[uuid.UUID] = Query(None, description="UUID del veicolo"),
    client_id: Optional[uuid.UUID] = Query(None, description="UUID del cliente"),
    search: Optional[str] = Query(None, description="Ricerca sul nome del cliente"),
    page: int = Query(1, ge=1, description="Numero pagina"),
    per_page: int = Query(50, ge=1, le=200, description="Elementi per pagina"),
    state: AppState = Depends(get_state),
) -> RentalList:
    rentals, total = rental_service.get_all(
        state,
        status=status_filter,
        vehicle_id=vehicle_id,
        client_id=client_id,
        search=search,
        page=page,
        per_page=per_page,
    )

    return RentalList(
        items=[RentalRead.model_validate(r) for r in rentals],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/{rental_id}",
    name="noleggio_dettaglio",
    summary="Dettaglio noleggio",
    response_model=RentalRead,
    status_code=status.HTTP_200_OK,
)
async def get_rental(
    rental_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> RentalRead:
    return RentalRead.model_validate(rental_service.get_by_id(state, rental_id))


@router.get(
    "/{rental_id}/contract.pdf",
    name="noleggio_contratto_pdf",
    summary="Contratto di noleggio (PDF)",
    response_class=Response,
    status_code=status.HTTP_200_OK,
)
async def get_rental_contract(
    rental_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> Response:
    """
    Genera il contratto di noleggio in PDF.

    Raises:
        NotFoundError: Se noleggio, veicolo o cliente non esistono
    """
    rental = rental_service.get_by_id(state, rental_id)
    vehicle = vehicle_service.get_by_id(state, rental.vehicle_id)
    client = client_service.get_by_id(state, rental.client_id)

    pdf_bytes = pdf_service.generate_contract_pdf(rental, vehicle, client)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="contrat-{rental.id}.pdf"'},
    )


@router.post(
    "/",
    name="noleggio_crea",
    summary="Crea noleggio",
    description="Crea un noleggio in stato prenotato e blocca veicolo e autista.",
    response_model=RentalRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_rental(
    data: RentalCreate,
    state: AppState = Depends(get_state),
) -> RentalRead:
    """
    Crea un nuovo noleggio.

    Raises:
        NotFoundError: Se veicolo, cliente, autista o partner non esistono
        BusinessValidationError: Se prezzo, date o disponibilità non sono validi
    """
    rental = rental_service.create(state, data)
    return RentalRead.model_validate(rental)


@router.post(
    "/{rental_id}/payments",
    name="noleggio_pagamento",
    summary="Registra pagamento",
    description="Aggiunge un pagamento e ricalcola importo pagato e saldo.",
    response_model=RentalRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_payment(
    rental_id: uuid.UUID,
    data: PaymentCreate,
    state: AppState = Depends(get_state),
) -> RentalRead:
    rental = rental_service.record_payment(state, rental_id, data.amount, data.date)
    return RentalRead.model_validate(rental)


@router.patch(
    "/{rental_id}/status",
    name="noleggio_stato",
    summary="Cambia stato noleggio",
    description="Aggiorna lo stato e sincronizza veicolo e autista.",
    response_model=RentalRead,
    status_code=status.HTTP_200_OK,
)
async def update_rental_status(
    rental_id: uuid.UUID,
    data: RentalStatusUpdate,
    state: AppState = Depends(get_state),
) -> RentalRead:
    rental = rental_service.transition_status(state, rental_id, data.status)
    return RentalRead.model_validate(rental)


@router.delete(
    "/{rental_id}",
    name="noleggio_elimina",
    summary="Elimina noleggio",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_rental(
    rental_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    rental_service.delete(state, rental_id)
