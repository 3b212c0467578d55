"""Order domain exceptions."""

from clinic_inventory.services.exceptions import NotFoundError


class OrderNotFound(NotFoundError):
    """Order not found."""

    pass
