"""Errors raised by the panel's collaborators."""


class SettingsStoreError(Exception):
    """A settings save or fetch failed. `message` is safe to show the user."""

    error_type = "InternalServerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SettingsValidationError(SettingsStoreError):
    """The store rejected the value (HTTP 422)."""

    error_type = "ValidationError"


class SettingsServerError(SettingsStoreError):
    """Any other store failure: 5xx, transport errors, unreadable bodies."""


class ListProviderError(Exception):
    """The mail provider could not return lists for an API key."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
