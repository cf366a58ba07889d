from decimal import Decimal, InvalidOperation

from ledgers.domain.constants import ACCOUNT_NUM_MAX_LENGTH, MAX_BALANCE
from ledgers.domain.exceptions import InvalidAccountNumber, InvalidAmount


def _is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_positive_amount(amount):
    if not _is_integer(amount):
        raise InvalidAmount("amount must be a positive integer in minor units")

    if amount <= 0:
        raise InvalidAmount("amount must be greater than zero")

    if amount > MAX_BALANCE:
        raise InvalidAmount(f"amount must be at most {MAX_BALANCE} minor units")

    return amount


def validate_entry_amount(amount):
    if not _is_integer(amount):
        raise InvalidAmount("entry amount must be an integer in minor units")

    if amount == 0:
        raise InvalidAmount("entry amount must be non-zero")

    if abs(amount) > MAX_BALANCE:
        raise InvalidAmount(f"entry amount must be at most {MAX_BALANCE} minor units")

    return amount


def validate_account_num(account_num):
    if not isinstance(account_num, str):
        raise InvalidAccountNumber("account number must be a string")

    if not account_num.strip():
        raise InvalidAccountNumber("account number cannot be empty")

    if len(account_num) > ACCOUNT_NUM_MAX_LENGTH:
        raise InvalidAccountNumber(
            f"account number must be at most {ACCOUNT_NUM_MAX_LENGTH} characters"
        )

    return account_num


def to_minor_units(value, *, exponent):
    """Convert a major-unit amount (``"12.34"``, ``Decimal``, ``int``) to minor units.

    Floats are rejected: the caller has to decide how a binary fraction maps to
    currency before it reaches the ledger.
    """
    if isinstance(value, (bool, float)):
        raise InvalidAmount("amount must be a decimal string, Decimal or integer")

    if isinstance(value, Decimal):
        parsed = value
    elif _is_integer(value) or isinstance(value, str):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"amount={value!r} is not a number") from exc
    else:
        raise InvalidAmount("amount must be a decimal string, Decimal or integer")

    if not parsed.is_finite():
        raise InvalidAmount("amount must be finite")

    scaled = parsed.scaleb(exponent)
    if abs(scaled) > MAX_BALANCE:
        raise InvalidAmount(f"amount={value} exceeds the maximum balance")

    if scaled != scaled.to_integral_value():
        raise InvalidAmount(
            f"amount={value} has more than {exponent} fractional digits"
        )

    return int(scaled)


def from_minor_units(amount, *, exponent):
    return Decimal(amount).scaleb(-exponent)
