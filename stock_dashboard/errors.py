"""Exceptions raised while loading the dashboard."""


class DashboardError(Exception):
    """Base class for all dashboard failures surfaced to the user."""


class CredentialMissing(DashboardError):
    """No API key is available, so nothing can be fetched."""

    def __init__(self, message: str = "Please save a valid API key before loading data.") -> None:
        super().__init__(message)


class FetchError(DashboardError):
    """A named endpoint failed during a fetch cycle."""

    def __init__(self, endpoint: str, message: str) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class NetworkFailure(FetchError):
    """Transport error or non-success HTTP status for one endpoint."""

    def __init__(self, endpoint: str, message: str | None = None, status_code: int | None = None) -> None:
        self.status_code = status_code
        if message is None:
            message = f"Network response for {endpoint} was not ok."
        super().__init__(endpoint, message)


class DataIntegrityFailure(FetchError):
    """The endpoint answered, but its payload cannot be used."""

    def __init__(self, endpoint: str, message: str | None = None) -> None:
        if message is None:
            message = f"Invalid payload received for {endpoint}."
        super().__init__(endpoint, message)
