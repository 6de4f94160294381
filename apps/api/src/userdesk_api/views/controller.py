"""View controller: sequences UI actions onto the validator and the user store."""

import logging
from enum import Enum

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
from userdesk_common.validation.user_validator import derive_username, validate_user

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    """Which screen state the list view is in."""

    IDLE = "idle"
    LIST_LOADING = "listLoading"
    LIST_LOADED = "listLoaded"
    LIST_ERROR = "listError"
    FORM_OPEN = "formOpen"
    DELETE_CONFIRM = "deleteConfirm"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class InvalidTransition(Exception):
    """An action was requested from a state that does not allow it."""

    def __init__(self, action: str, state: ViewState) -> None:
        super().__init__(f"Cannot {action} while in state {state.value}")
        self.action = action
        self.state = state


class ViewController:
    """Transient UI state for the user list screen.

    Owns which overlay is open, the record selected for edit/delete, the
    search text, per-field form errors and the alert-level notice. The list
    itself lives in the injected UserStore.
    """

    def __init__(self, store: UserStore) -> None:
        self.store = store
        self.state = ViewState.IDLE
        self.form_mode: FormMode | None = None
        self.form_draft = UserDraft()
        self.form_errors: dict[str, str] = {}
        self.form_submitting = False
        self.selected: UserRecord | None = None
        # Bumped whenever an overlay opens or closes; in-flight actions only
        # close the overlay they were started from.
        self._overlay_token = 0
        self.search_text = ""
        self.notice: str | None = None
        self.list_error: str | None = None

    def _require(self, action: str, *states: ViewState) -> None:
        if self.state not in states:
            raise InvalidTransition(action, self.state)

    def _transition(self, state: ViewState) -> None:
        logger.debug("View state %s -> %s", self.state.value, state.value)
        self.state = state

    def _new_overlay(self) -> int:
        self._overlay_token += 1
        return self._overlay_token

    def _close_overlay(self) -> None:
        self._new_overlay()
        self.form_submitting = False
        self.form_mode = None
        self.form_draft = UserDraft()
        self.form_errors = {}
        self.selected = None
        self._transition(ViewState.LIST_LOADED)

    async def start(self) -> None:
        """Initial load of the list."""
        self._require("start", ViewState.IDLE)
        await self._load()

    async def refresh(self) -> None:
        """Reload the list from the remote API."""
        self._require("refresh", ViewState.LIST_LOADED, ViewState.LIST_ERROR)
        await self._load()

    async def _load(self) -> None:
        self._transition(ViewState.LIST_LOADING)
        try:
            await self.store.list_users()
        except FetchFailed as e:
            self.list_error = str(e)
            self._transition(ViewState.LIST_ERROR)
            return
        self.list_error = None
        self._transition(ViewState.LIST_LOADED)

    def open_create(self) -> None:
        self._require("open the create form", ViewState.LIST_LOADED)
        self._new_overlay()
        self.form_mode = FormMode.CREATE
        self.form_draft = UserDraft()
        self.form_errors = {}
        self.selected = None
        self._transition(ViewState.FORM_OPEN)

    def open_edit(self, user_id: int) -> None:
        self._require("open the edit form", ViewState.LIST_LOADED)
        user = self.store.find(user_id)
        if user is None:
            raise UserNotFound(user_id)
        self._new_overlay()
        self.form_mode = FormMode.EDIT
        self.form_draft = UserDraft.from_record(user)
        self.form_errors = {}
        self.selected = user
        self._transition(ViewState.FORM_OPEN)

    def cancel_form(self) -> None:
        self._require("cancel the form", ViewState.FORM_OPEN)
        self._close_overlay()

    def form_username(self) -> str:
        """Username shown in the form: derived from the name on create, fixed on edit."""
        return self._username_for(self.form_draft)

    def _username_for(self, draft: UserDraft) -> str:
        if self.form_mode is FormMode.EDIT and self.selected is not None:
            return self.selected.username
        return derive_username(draft.name)

    async def submit(self, draft: UserDraft) -> UserRecord | None:
        """Validate the draft and send it to the store.

        Args:
            draft: Values entered in the form

        Returns:
            The saved record, or None when validation or the remote call failed
            (the form then stays open with errors or a notice)
        """
        self._require("submit the form", ViewState.FORM_OPEN)
        if self.form_submitting:
            self.notice = "A submission is already in progress."
            return None

        draft = draft.model_copy(update={"username": self._username_for(draft)})
        self.form_draft = draft
        self.form_errors = validate_user(draft)
        if self.form_errors:
            logger.info("Form submission blocked by %d invalid fields", len(self.form_errors))
            return None

        token = self._overlay_token
        self.notice = None
        self.form_submitting = True
        try:
            if self.form_mode is FormMode.EDIT and self.selected is not None:
                record = await self.store.update_user(self.selected.id, draft)
            else:
                record = await self.store.create_user(draft)
        except ValidationFailed as e:
            if self._overlay_token == token:
                self.form_errors = e.errors
            return None
        except (CreateFailed, UpdateFailed, UserNotFound, RecordBusy) as e:
            self.notice = str(e)
            return None
        finally:
            if self._overlay_token == token:
                self.form_submitting = False

        # The form may have been cancelled or reopened while the request was in flight.
        if self._overlay_token == token:
            self._close_overlay()
        return record

    def request_delete(self, user_id: int) -> None:
        self._require("request a delete", ViewState.LIST_LOADED)
        user = self.store.find(user_id)
        if user is None:
            raise UserNotFound(user_id)
        self._new_overlay()
        self.selected = user
        self._transition(ViewState.DELETE_CONFIRM)

    def delete_prompt(self) -> str:
        name = self.selected.name if self.selected else ""
        return f"Are you sure you want to delete {name}?"

    def cancel_delete(self) -> None:
        self._require("cancel the delete", ViewState.DELETE_CONFIRM)
        self._close_overlay()

    async def confirm_delete(self) -> bool:
        """Delete the selected record. Returns False when the delete failed."""
        self._require("confirm the delete", ViewState.DELETE_CONFIRM)
        user = self.selected
        if user is None:
            raise InvalidTransition("confirm the delete without a selection", self.state)

        token = self._overlay_token
        self.notice = None
        try:
            await self.store.delete_user(user.id)
        except (DeleteFailed, UserNotFound, RecordBusy) as e:
            self.notice = str(e)
            if self._overlay_token == token:
                self._close_overlay()
            return False

        if self._overlay_token == token:
            self._close_overlay()
        return True

    def set_search(self, text: str) -> None:
        self.search_text = text

    def visible_users(self) -> list[UserRecord]:
        """Filtered view of the list for the current search text."""
        return self.store.filter_users(self.search_text)

    def is_busy(self, user_id: int) -> bool:
        return self.store.is_busy(user_id)

    def dismiss_notice(self) -> None:
        self.notice = None
