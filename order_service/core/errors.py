class OrderServiceError(Exception):
    """Base error for failures surfaced to API callers as ``{"message": ...}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(OrderServiceError):
    """Malformed client input, e.g. a customer id that is not a UUID."""

    status_code = 400


class OrderNotFoundError(OrderServiceError):
    status_code = 404


class StoreError(OrderServiceError):
    """The store rejected a query or aborted a transaction."""

    status_code = 500
