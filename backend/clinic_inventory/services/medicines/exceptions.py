"""Medicine domain exceptions."""

from clinic_inventory.services.exceptions import NotFoundError


class MedicineNotFound(NotFoundError):
    """Medicine not found."""

    pass
