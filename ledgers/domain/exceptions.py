class DomainError(Exception):
    """Base class for domain-layer errors."""


class InvalidAmount(DomainError):
    """Raised when an amount is not a valid integer of minor units."""


class InvalidAccountNumber(DomainError):
    """Raised when an account number is empty or malformed."""


class InvalidEntries(DomainError):
    """Raised when a transaction has no entries or a malformed entry."""


class AccountNotFound(DomainError):
    """Raised when a looked-up account does not exist."""


class DuplicateAccount(DomainError):
    """Raised when an account number is already taken."""


class DuplicateTransaction(DomainError):
    """Raised when a transaction identifier is already recorded."""


class TransactionNotFound(DomainError):
    """Raised when a transaction record does not exist."""


class InvalidTransactionState(DomainError):
    """Raised when transaction transition is not allowed."""


class BalanceConstraintViolated(DomainError):
    """Raised when the store rejects an increment that breaks a balance constraint."""

    def __init__(self, account_num, delta):
        super().__init__(
            f"increment of {delta} rejected by balance constraint on account={account_num}"
        )
        self.account_num = account_num
        self.delta = delta
