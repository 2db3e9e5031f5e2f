"""
Router FastAPI per Proprietari e Partner (affiliati)
Progetto: Fleet Rental Manager (Gestionale Noleggio)
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status

from fleet_rental.core.state import AppState, get_state
from fleet_rental.schemas.partner import (
    AffiliateCreate,
    AffiliateRead,
    OwnerCreate,
    OwnerRead,
)
from fleet_rental.services.partner_service import affiliate_service, owner_service

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router proprietari
owners_router = APIRouter(
    prefix="/owners",
    tags=["Proprietari"],
)

# Router partner
affiliates_router = APIRouter(
    prefix="/affiliates",
    tags=["Partner"],
)


# -------------------------------------------------------------------
# Proprietari
# -------------------------------------------------------------------

@owners_router.get(
    "/",
    name="proprietari_lista",
    summary="Lista proprietari",
    response_model=list[OwnerRead],
    status_code=status.HTTP_200_OK,
)
async def get_owners(state: AppState = Depends(get_state)) -> list[OwnerRead]:
    return [OwnerRead.model_validate(o) for o in owner_service.get_all(state)]


@owners_router.post(
    "/",
    name="proprietario_crea",
    summary="Crea proprietario",
    response_model=OwnerRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_owner(
    data: OwnerCreate,
    state: AppState = Depends(get_state),
) -> OwnerRead:
    return OwnerRead.model_validate(owner_service.create(state, data))


@owners_router.delete(
    "/{owner_id}",
    name="proprietario_elimina",
    summary="Elimina proprietario",
    description="Elimina un proprietario che non possiede veicoli.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_owner(
    owner_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    owner_service.delete(state, owner_id)


# -------------------------------------------------------------------
# Partner
# -------------------------------------------------------------------

@affiliates_router.get(
    "/",
    name="partner_lista",
    summary="Lista partner",
    response_model=list[AffiliateRead],
    status_code=status.HTTP_200_OK,
)
async def get_affiliates(state: AppState = Depends(get_state)) -> list[AffiliateRead]:
    return [AffiliateRead.model_validate(a) for a in affiliate_service.get_all(state)]


@affiliates_router.post(
    "/",
    name="partner_crea",
    summary="Crea partner",
    response_model=AffiliateRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_affiliate(
    data: AffiliateCreate,
    state: AppState = Depends(get_state),
) -> AffiliateRead:
    return AffiliateRead.model_validate(affiliate_service.create(state, data))


@affiliates_router.delete(
    "/{affiliate_id}",
    name="partner_elimina",
    summary="Elimina partner",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_affiliate(
    affiliate_id: uuid.UUID,
    state: AppState = Depends(get_state),
) -> None:
    affiliate_service.delete(state, affiliate_id)
