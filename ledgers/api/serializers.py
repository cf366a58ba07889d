from django.conf import settings
from rest_framework import serializers

from ledgers.domain.constants import ACCOUNT_NUM_MAX_LENGTH
from ledgers.domain.exceptions import InvalidAmount
from ledgers.domain.policies import from_minor_units, to_minor_units
from ledgers.models import Account, Txn, TxnEntry


class AmountField(serializers.Field):
    """Major-unit amount in, minor-unit integer out."""

    default_error_messages = {
        "invalid": "amount must be a number with at most {exponent} fractional digits",
    }

    def to_internal_value(self, data):
        exponent = settings.LEDGER_AMOUNT_EXPONENT
        if isinstance(data, float):
            # JSON numbers arrive as floats; their repr is what the client sent.
            data = repr(data)
        try:
            return to_minor_units(data, exponent=exponent)
        except InvalidAmount:
            self.fail("invalid", exponent=exponent)

    def to_representation(self, value):
        return str(from_minor_units(value, exponent=settings.LEDGER_AMOUNT_EXPONENT))


class AccountSerializer(serializers.ModelSerializer):
    balance_display = serializers.SerializerMethodField()

    class Meta:
        model = Account
        fields = ("account_num", "balance", "balance_display", "created_at", "updated_at")
        read_only_fields = fields

    def get_balance_display(self, account):
        return str(
            from_minor_units(account.balance, exponent=settings.LEDGER_AMOUNT_EXPONENT)
        )


class OpenAccountRequestSerializer(serializers.Serializer):
    account_num = serializers.CharField(max_length=ACCOUNT_NUM_MAX_LENGTH)
    balance = AmountField(required=False, default=0)


class AmountRequestSerializer(serializers.Serializer):
    amount = AmountField()


class TransferRequestSerializer(serializers.Serializer):
    to = serializers.CharField(max_length=ACCOUNT_NUM_MAX_LENGTH)
    amount = AmountField()


class TxnEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = TxnEntry
        fields = ("position", "account_num", "amount")


class TxnSerializer(serializers.ModelSerializer):
    entries = serializers.SerializerMethodField()

    class Meta:
        model = Txn
        fields = ("id", "status", "error_reason", "entries", "created_at", "updated_at")

    def get_entries(self, txn):
        return TxnEntrySerializer(txn.ordered_entries(), many=True).data
