from ledgers.models.account import Account
from ledgers.models.txn import Txn, TxnEntry

__all__ = ["Account", "Txn", "TxnEntry"]
