class InventoryError(Exception):
    """Base class for inventory domain errors."""


class InvalidStayError(InventoryError, ValueError):
    """Stay window or requested quantity is not usable for a query."""
