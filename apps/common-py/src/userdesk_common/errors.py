"""Error taxonomy for user store operations."""


class UserStoreError(Exception):
    """Base class for failures surfaced by the user store."""

    default_message = "User operation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class FetchFailed(UserStoreError):
    """Fetching the collection or a single record from the remote API failed."""

    default_message = "Failed to fetch users."


class CreateFailed(UserStoreError):
    default_message = "Failed to create user."


class UpdateFailed(UserStoreError):
    default_message = "Failed to update user."


class DeleteFailed(UserStoreError):
    default_message = "Failed to delete user."


class ValidationFailed(UserStoreError):
    """A draft did not pass validation. Never reaches the network."""

    default_message = "User draft is invalid."

    def __init__(self, errors: dict[str, str], message: str | None = None) -> None:
        super().__init__(message)
        self.errors = dict(errors)


class UserNotFound(UserStoreError, LookupError):
    """No record with the given id is loaded."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found.")
        self.user_id = user_id


class RecordBusy(UserStoreError):
    """A mutation for the same record is still in flight."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"An action for user {user_id} is already in progress.")
        self.user_id = user_id
