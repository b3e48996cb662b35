class PantryChefError(Exception):
    """Base class for errors raised by the recipe pipeline."""


class PreferencesMissing(PantryChefError):
    """The user's onboarding preference record is absent."""


class UserNotFound(PreferencesMissing):
    """The user document itself does not exist."""


class InvalidQuery(PantryChefError):
    """A keyword search was requested with an empty query."""


class UpstreamFetchFailed(PantryChefError):
    """The recipe service could not be reached or answered with an error."""

    def __init__(self, message, detail=None, status_code=None):
        super().__init__(message)
        self.detail = detail if detail is not None else message
        self.status_code = status_code
