"""Store error types raised by services and rendered by the API."""


class StoreError(Exception):
    """Base error carrying an HTTP status and a client-facing message."""
    status_code = 500

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self):
        data = dict(self.payload)
        data['success'] = False
        data['message'] = self.message
        return data


class ValidationError(StoreError):
    """Missing or invalid input."""
    status_code = 400


class NotFound(StoreError):
    """Referenced product, cart item, order or size does not exist."""
    status_code = 404


class InsufficientStock(StoreError):
    """Requested quantity exceeds the stock of a size variant."""
    status_code = 400

    def __init__(self, product_id, size, requested, available):
        label = f' (size {size})' if size else ''
        super().__init__(
            f'Not enough stock for product {product_id}{label}: '
            f'requested {requested}, available {available}',
            payload={
                'productId': product_id,
                'size': size,
                'requested': requested,
                'available': available,
            }
        )
        self.product_id = product_id
        self.size = size
        self.requested = requested
        self.available = available


class Forbidden(StoreError):
    status_code = 403


class PersistenceFailure(StoreError):
    """The database rejected or could not complete a write."""
    status_code = 500


class AuthenticationFailed(StoreError):
    status_code = 401
