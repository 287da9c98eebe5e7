"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class AuthorizationError(DomainError):
    """Raised when a sender is not allowed to perform the attempted action."""


class UnauthorizedError(AuthorizationError):
    """Raised when the sender is not the admin of the targeted denom."""

    def __init__(self, denom: str, admin: str, sender: str) -> None:
        super().__init__(f"Unauthorized: {sender} is not the admin of {denom} ({admin}).")
        self.denom = denom
        self.admin = admin
        self.sender = sender


class SenderMismatchError(AuthorizationError):
    """Raised when the sender embedded in a message is not the transaction sender."""

    def __init__(self, sender: str, msg_sender: str) -> None:
        super().__init__(
            f"Message sender {msg_sender} does not match transaction sender {sender}."
        )
        self.sender = sender
        self.msg_sender = msg_sender


class FeeCollectionError(DomainError):
    """Raised when the denom creation fee could not be collected.

    The failing sub-call error is available as ``cause`` (and ``__cause__``).
    """

    def __init__(self, denom: str, sender: str, cause: Exception) -> None:
        super().__init__(
            f"Error on gather fee for denom creation of {denom} from {sender}: {cause}"
        )
        self.denom = denom
        self.sender = sender
        self.cause = cause


# ============================================================================
#                       Token factory related errors
# ============================================================================


class TokenFactoryError(DomainError):
    """Base class for token-factory ledger errors."""


class DenomAlreadyExistsError(TokenFactoryError):
    """Raised when creating a denom that already exists."""

    def __init__(self, denom: str) -> None:
        super().__init__(f"Denom already exists: {denom}")
        self.denom = denom


class DenomNotFoundError(TokenFactoryError):
    """Raised when operating on a denom that was never created."""

    def __init__(self, denom: str) -> None:
        super().__init__(f"Denom not found: {denom}")
        self.denom = denom


class InsufficientSupplyError(TokenFactoryError):
    """Raised when burning more than the recorded supply of a denom."""

    def __init__(self, denom: str, supply: int, amount: int) -> None:
        super().__init__(
            f"Insufficient supply of {denom}: cannot burn {amount}, supply is {supply}."
        )
        self.denom = denom
        self.supply = supply
        self.amount = amount


class InvalidDenomError(TokenFactoryError):
    """Raised when a subdenom or denom does not have a valid format."""

    def __init__(self, denom: str, reason: str) -> None:
        super().__init__(f"Invalid denom {denom!r}: {reason}")
        self.denom = denom
        self.reason = reason


class InvalidAmountError(TokenFactoryError):
    """Raised when a mint or burn amount is not a positive integer."""

    def __init__(self, denom: str, amount: int) -> None:
        super().__init__(f"Invalid amount {amount} for {denom}: must be positive.")
        self.denom = denom
        self.amount = amount
