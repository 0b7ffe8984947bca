"""Error taxonomy shared by the ledger, billing and collaborator layers."""


class MilkRoundError(Exception):
    """Base class for every error raised by the core."""


class ValidationError(MilkRoundError, ValueError):
    """Malformed input to a mutation; nothing was changed."""


class NotFoundError(MilkRoundError, LookupError):
    """An operation referenced an unknown customer or ledger key."""


class InvalidRateError(MilkRoundError, ValueError):
    """Billing met a non-positive price per litre."""

    def __init__(self, customer_id: str, rate: float) -> None:
        super().__init__(f"Customer '{customer_id}' has invalid price per litre {rate!r}.")
        self.customer_id = customer_id
        self.rate = rate


class ExternalServiceError(MilkRoundError):
    """A collaborator (text generation, route suggestion) failed or returned garbage."""
