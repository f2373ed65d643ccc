"""Fulcrum-specific exceptions for error handling."""


class FulcrumError(Exception):
    """Base exception for all Fulcrum operations."""
    pass


class FulcrumAPIError(FulcrumError):
    """HTTP error from the Fulcrum REST API.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class ClientNotConfiguredError(FulcrumError):
    """An operation needs the API but the entity was built without a client."""
    pass
