"""User records JSON API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from userdesk_api.services import get_user_store
from userdesk_common.errors import (
    CreateFailed,
    DeleteFailed,
    FetchFailed,
    RecordBusy,
    UpdateFailed,
    UserNotFound,
    ValidationFailed,
)
from userdesk_common.models.user import UserDraft, UserRecord
from userdesk_common.services.user_store import UserStore
from userdesk_common.validation.user_validator import derive_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def _validation_error(exc: ValidationFailed) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(exc), "errors": exc.errors},
    )


def _bad_gateway(exc: Exception) -> HTTPException:
    logger.warning("Remote users API failure: %s", exc)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.get("", response_model=list[UserRecord])
async def list_users(
    q: str = Query("", description="Case-insensitive name filter"),
    store: UserStore = Depends(get_user_store),
) -> list[UserRecord]:
    return store.filter_users(q)


@router.post("/reload", response_model=list[UserRecord])
async def reload_users(store: UserStore = Depends(get_user_store)) -> list[UserRecord]:
    """Rebuild the in-memory list from the remote API."""
    try:
        return await store.list_users()
    except FetchFailed as e:
        raise _bad_gateway(e) from e


@router.get("/{user_id}", response_model=UserRecord)
async def get_user(user_id: int, store: UserStore = Depends(get_user_store)) -> UserRecord:
    try:
        return await store.get_user(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except FetchFailed as e:
        raise _bad_gateway(e) from e


@router.post("", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
async def create_user(draft: UserDraft, store: UserStore = Depends(get_user_store)) -> UserRecord:
    """Create a user; the username is always derived from the name."""
    draft = draft.model_copy(update={"username": derive_username(draft.name)})
    try:
        return await store.create_user(draft)
    except ValidationFailed as e:
        raise _validation_error(e) from e
    except CreateFailed as e:
        raise _bad_gateway(e) from e


@router.put("/{user_id}", response_model=UserRecord)
async def update_user(user_id: int, draft: UserDraft, store: UserStore = Depends(get_user_store)) -> UserRecord:
    try:
        return await store.update_user(user_id, draft)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except RecordBusy as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValidationFailed as e:
        raise _validation_error(e) from e
    except UpdateFailed as e:
        raise _bad_gateway(e) from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, store: UserStore = Depends(get_user_store)):
    try:
        await store.delete_user(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except RecordBusy as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except DeleteFailed as e:
        raise _bad_gateway(e) from e
    return None
