from dataclasses import dataclass

from ledgers.domain.exceptions import InvalidEntries
from ledgers.domain.policies import (
    validate_account_num,
    validate_entry_amount,
    validate_positive_amount,
)


@dataclass(frozen=True)
class Entry:
    """A signed balance delta against one account.

    Positive amounts credit the account, negative amounts debit it.
    """

    account_num: str
    amount: int

    def __post_init__(self):
        validate_account_num(self.account_num)
        validate_entry_amount(self.amount)

    @property
    def is_credit(self):
        return self.amount > 0

    @property
    def is_debit(self):
        return self.amount < 0


def debit(account_num, amount):
    validated_amount = validate_positive_amount(amount)
    return [Entry(account_num, -validated_amount)]


def credit(account_num, amount):
    validated_amount = validate_positive_amount(amount)
    return [Entry(account_num, validated_amount)]


def transfer(source, target, amount):
    validated_amount = validate_positive_amount(amount)
    return [
        Entry(source, -validated_amount),
        Entry(target, validated_amount),
    ]


def validate_entries(entries):
    validated = list(entries)
    if not validated:
        raise InvalidEntries("a transaction needs at least one entry")

    for entry in validated:
        if not isinstance(entry, Entry):
            raise InvalidEntries(f"unexpected entry type={type(entry).__name__}")

    return validated
