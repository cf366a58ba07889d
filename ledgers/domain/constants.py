from django.db import models


class TxnStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    SUCCESS = "SUCCESS", "Success"
    FAILED = "FAILED", "Failed"


class ErrorReason(models.TextChoices):
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND", "Account not found"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE", "Insufficient balance"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT", "Duplicate account"


TERMINAL_STATUSES = frozenset({TxnStatus.SUCCESS, TxnStatus.FAILED})

ACCOUNT_NUM_MAX_LENGTH = 64

# Minor units. Keeps balance + delta far from the 64-bit integer limit.
MAX_BALANCE = 10**15
