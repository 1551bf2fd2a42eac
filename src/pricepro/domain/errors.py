"""Domain-specific exception classes for the pricing service."""


class PriceProError(Exception):
    """Base class for all domain errors in the pricing service."""


class RateConfigError(PriceProError):
    """Raised when a rate configuration cannot be loaded or is invalid.

    Evaluation never raises this: rates are checked when a configuration is
    built, loaded from storage, or updated.
    """


class InvalidAmountError(PriceProError):
    """Raised when user-entered amount text is not a number.

    Attributes:
        text: The rejected input.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Not a valid amount: {text!r}")


class UnknownProductError(PriceProError):
    """Raised when a product model number is not in the catalog.

    Attributes:
        model: The model number that was looked up.
    """

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"No product with model '{model}' in the catalog")


class CatalogError(PriceProError):
    """Raised when the product catalog file is missing or malformed."""
