from apps.api.exceptions import DomainError


class ProductNotFoundError(DomainError):
    error_code = "NOT_FOUND"
    default_message = "Product not found"


class CartNotFoundError(DomainError):
    error_code = "NOT_FOUND"
    default_message = "Cart not found"


class CartItemNotFoundError(DomainError):
    error_code = "NOT_FOUND"
    default_message = "Item not in cart"


class CartOwnerNotFoundError(DomainError):
    error_code = "NOT_FOUND"
    default_message = "User not found"


class InvalidQuantityError(DomainError):
    error_code = "VALIDATION_ERROR"
    default_message = "Quantity must be a positive integer"


class InvalidCartRequestError(DomainError):
    error_code = "VALIDATION_ERROR"
    default_message = "Invalid cart request"


class CartConflictError(DomainError):
    """Another request changed the cart between our read and our write."""

    error_code = "CONFLICT"
    default_message = "Cart was modified concurrently, please retry"
