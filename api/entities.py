from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_entity_store
from core.store import EntityStore
from docs.entities.entity import (
    entity_create_description,
    entity_delete_description,
    entity_update_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS
from schemas.entities.entity import EntityCreate, EntityUpdate

router = APIRouter(prefix="/entities", tags=["Entities"])


@router.get("/{entity_type}", response_model=dict, summary="List Entities")
def list_entities(entity_type: str, store: EntityStore = Depends(get_entity_store)):
    try:
        entities = store.list_entities(entity_type)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return {"entities": [e.to_dict() for e in entities]}


@router.post(
    "/{entity_type}",
    response_model=dict,
    status_code=201,
    description=entity_create_description,
    summary="Create Entity",
)
def create_entity(
    entity_type: str,
    payload: EntityCreate,
    store: EntityStore = Depends(get_entity_store),
):
    try:
        entity = store.create_entity(entity_type, payload.attributes, payload.id)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return entity.to_dict()


@router.get("/{entity_type}/{entity_id}", response_model=dict, summary="Get Entity")
def get_entity(
    entity_type: str, entity_id: str, store: EntityStore = Depends(get_entity_store)
):
    try:
        entity = store.get_entity(entity_type, entity_id)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return entity.to_dict()


@router.put(
    "/{entity_type}/{entity_id}",
    response_model=dict,
    description=entity_update_description,
    summary="Update Entity",
)
def update_entity(
    entity_type: str,
    entity_id: str,
    payload: EntityUpdate,
    store: EntityStore = Depends(get_entity_store),
):
    try:
        entity = store.update_entity(entity_type, entity_id, payload.attributes)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return entity.to_dict()


@router.delete(
    "/{entity_type}/{entity_id}",
    response_model=dict,
    description=entity_delete_description,
    summary="Delete Entity",
)
def delete_entity(
    entity_type: str, entity_id: str, store: EntityStore = Depends(get_entity_store)
):
    try:
        entity = store.delete_entity(entity_type, entity_id)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return entity.to_dict()
