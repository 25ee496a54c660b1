"""Custom exceptions for the portion calculator."""


class InvalidPortionsError(ValueError):
    """Raised when a per-serving value is requested for zero or fewer portions."""

    def __init__(self, portions: float):
        """Initialize exception with the offending portion count.

        Args:
            portions: Portion count that was rejected
        """
        self.portions = portions
        super().__init__(f"Portion count must be at least 1, got {portions}")


class UnknownIngredientFieldError(ValueError):
    """Raised when an ingredient field name is not one of the known fields."""

    def __init__(self, field_name: str):
        """Initialize exception with the unknown field name.

        Args:
            field_name: Field name that was requested
        """
        self.field_name = field_name
        super().__init__(f"Unknown ingredient field '{field_name}'")
