class BankAPIError(Exception):
    """Raised when a request to the bank API fails (HTTP error, timeout, network or decoding)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(ValueError):
    """Raised when a required credential is missing or empty."""
