"""HTTP routes for the deliveries sheet."""

import logging

from fastapi import APIRouter, Depends

from milk_api.config.config import UPDATABLE_FIELDS
from milk_api.config.config_loader import get_config
from milk_api.schemas import (
    DeliveryCreate,
    DeliveryDelete,
    DeliveryDeleteResponse,
    DeliveryList,
    DeliveryUpdate,
    DeliveryUpdateResponse,
    MessageResponse,
)
from milk_api.services import deliveries
from milk_api.services.records import DeliveryStore
from milk_api.services.sheets import GoogleSheetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["deliveries"])


def get_store() -> DeliveryStore:
    """A fresh sheet store per request; nothing is shared between requests."""
    return GoogleSheetStore(get_config())


@router.get("", response_model=DeliveryList)
def read_deliveries(store: DeliveryStore = Depends(get_store)):
    return deliveries.list_deliveries(store)


@router.post("", response_model=MessageResponse)
def add_delivery(payload: DeliveryCreate, store: DeliveryStore = Depends(get_store)):
    return deliveries.create_delivery(store, payload.model_dump())


@router.api_route("", methods=["PUT", "PATCH"], response_model=DeliveryUpdateResponse)
def edit_delivery(payload: DeliveryUpdate, store: DeliveryStore = Depends(get_store)):
    # exclude_unset: a field left out of the body must not be touched
    changes = payload.model_dump(include=set(UPDATABLE_FIELDS), exclude_unset=True)
    return deliveries.update_delivery(store, payload.user, payload.target_date, changes)


@router.delete("", response_model=DeliveryDeleteResponse)
def remove_delivery(payload: DeliveryDelete, store: DeliveryStore = Depends(get_store)):
    return deliveries.delete_delivery(store, payload.user, payload.target_date)
