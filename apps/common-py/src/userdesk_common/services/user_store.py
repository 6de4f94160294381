"""In-memory user list synchronized with the remote users API."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from userdesk_common.errors import (
    CreateFailed,
    DeleteFailed,
    FetchFailed,
    RecordBusy,
    UpdateFailed,
    UserNotFound,
    ValidationFailed,
)
from userdesk_common.infra.http.users_client import UsersApiError, UsersClient
from userdesk_common.models.user import UserDraft, UserRecord
from userdesk_common.validation.user_validator import validate_user

logger = logging.getLogger(__name__)

T = TypeVar("T")


def synthesize_user_id(users: Iterable[UserRecord], high_water: int = 0) -> int:
    """Client-side id for a newly created record.

    The backing service echoes creates without persisting them, so it never
    returns an authoritative id. For an untouched list with ids ``1..n`` this
    is ``n + 1``; ``high_water`` (the highest id ever issued) keeps ids from
    being reissued after deletions.

    Args:
        users: Records currently in the list
        high_water: Highest id previously synthesized or loaded

    Returns:
        A positive id not used by any current or previously issued record
    """
    users = list(users)
    highest = max((user.id for user in users), default=0)
    return max(len(users), highest, high_water) + 1


class UserStore:
    """Ordered in-memory cache of user records backed by a UsersClient."""

    def __init__(self, client: UsersClient) -> None:
        """Initialize the store.

        Args:
            client: Remote users API client
        """
        self._client = client
        self._users: list[UserRecord] = []
        self._high_water = 0
        self._in_flight: set[int] = set()

    @property
    def users(self) -> list[UserRecord]:
        """Snapshot of the in-memory list in insertion/fetch order."""
        return list(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def is_busy(self, user_id: int) -> bool:
        """Whether a mutation for this record is still in flight."""
        return user_id in self._in_flight

    def find(self, user_id: int) -> UserRecord | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    async def _call(self, func: Callable[..., T], *args: Any) -> T:
        # requests is blocking; keep the event loop free while it runs.
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def _require(self, user_id: int) -> UserRecord:
        user = self.find(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def _ensure_idle(self, user_id: int) -> None:
        if user_id in self._in_flight:
            logger.warning("Rejected concurrent action for user %s", user_id)
            raise RecordBusy(user_id)

    @staticmethod
    def _ensure_valid(draft: UserDraft) -> None:
        errors = validate_user(draft)
        if errors:
            raise ValidationFailed(errors)

    async def list_users(self) -> list[UserRecord]:
        """Fetch the full collection and replace the in-memory list.

        Returns:
            The new list

        Raises:
            FetchFailed: The request failed or the list repeats an id; the
                previous list is kept
        """
        try:
            raw = await self._call(self._client.list_users)
            users = [UserRecord.model_validate(item) for item in raw]
        except (UsersApiError, ValidationError) as e:
            logger.error("Error fetching users: %s", e)
            raise FetchFailed() from e

        ids = [user.id for user in users]
        if len(set(ids)) != len(ids):
            duplicates = sorted({user_id for user_id in ids if ids.count(user_id) > 1})
            logger.error("Remote users list repeats ids %s", duplicates)
            raise FetchFailed()

        self._users = users
        self._high_water = max(self._high_water, max((user.id for user in users), default=0))
        logger.info("Loaded %d users", len(users))
        return list(users)

    async def get_user(self, user_id: int) -> UserRecord:
        """Get a record, preferring the in-memory list over the remote item endpoint.

        Raises:
            UserNotFound: Neither the list nor the remote API knows the id
            FetchFailed: The remote request failed
        """
        cached = self.find(user_id)
        if cached is not None:
            return cached

        try:
            raw = await self._call(self._client.get_user, user_id)
            return UserRecord.model_validate(raw)
        except UsersApiError as e:
            if e.status_code == 404:
                raise UserNotFound(user_id) from e
            logger.error("Error fetching user %s: %s", user_id, e)
            raise FetchFailed("Error fetching user details.") from e
        except ValidationError as e:
            logger.error("Malformed user %s from remote API: %s", user_id, e)
            raise FetchFailed("Error fetching user details.") from e

    async def create_user(self, draft: UserDraft) -> UserRecord:
        """Send a validated draft to the collection and append the echoed record.

        Raises:
            ValidationFailed: The draft is invalid; nothing is sent
            CreateFailed: The request failed; the list is unchanged
        """
        self._ensure_valid(draft)
        payload = draft.to_payload()

        try:
            echoed = await self._call(self._client.create_user, payload)
            user_id = synthesize_user_id(self._users, self._high_water)
            record = UserRecord.model_validate({**payload, **echoed, "id": user_id})
        except (UsersApiError, ValidationError) as e:
            logger.error("Error creating user: %s", e)
            raise CreateFailed() from e

        self._users.append(record)
        self._high_water = max(self._high_water, record.id)
        logger.info("Created user %s (%s)", record.id, record.username)
        return record

    async def update_user(self, user_id: int, draft: UserDraft) -> UserRecord:
        """Replace all non-identity fields of a record.

        The stored username always wins over the draft's.

        Raises:
            UserNotFound: The id is not in the list
            RecordBusy: Another mutation for the record is in flight
            ValidationFailed: The draft is invalid; nothing is sent
            UpdateFailed: The request failed; the entry is untouched
        """
        current = self._require(user_id)
        self._ensure_idle(user_id)
        draft = draft.model_copy(update={"username": current.username})
        self._ensure_valid(draft)
        payload = draft.to_payload()

        self._in_flight.add(user_id)
        try:
            echoed = await self._call(self._client.replace_user, user_id, payload)
            record = UserRecord.model_validate(
                {**payload, **echoed, "id": user_id, "username": current.username}
            )
        except (UsersApiError, ValidationError) as e:
            logger.error("Error updating user %s: %s", user_id, e)
            raise UpdateFailed() from e
        finally:
            self._in_flight.discard(user_id)

        for index, user in enumerate(self._users):
            if user.id == user_id:
                self._users[index] = record
                break
        else:
            logger.warning("User %s left the list while its update was in flight", user_id)
        logger.info("Updated user %s", user_id)
        return record

    async def delete_user(self, user_id: int) -> None:
        """Delete a record remotely, then drop it from the list.

        Raises:
            UserNotFound: The id is not in the list
            RecordBusy: Another mutation for the record is in flight
            DeleteFailed: The request failed; the list is unchanged
        """
        self._require(user_id)
        self._ensure_idle(user_id)

        self._in_flight.add(user_id)
        try:
            await self._call(self._client.delete_user, user_id)
        except UsersApiError as e:
            logger.error("Error deleting user %s: %s", user_id, e)
            raise DeleteFailed() from e
        finally:
            self._in_flight.discard(user_id)

        self._users = [user for user in self._users if user.id != user_id]
        logger.info("Deleted user %s", user_id)

    def filter_users(self, term: str) -> list[UserRecord]:
        """Records whose name contains ``term``, case-insensitively, in list order."""
        if not term:
            return list(self._users)
        needle = term.lower()
        return [user for user in self._users if needle in user.name.lower()]
