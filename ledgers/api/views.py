from rest_framework import status as http_status
from rest_framework.views import APIView

from ledgers.api.responses import api_response
from ledgers.api.serializers import (
    AccountSerializer,
    AmountRequestSerializer,
    OpenAccountRequestSerializer,
    TransferRequestSerializer,
    TxnSerializer,
)
from ledgers.domain.constants import ErrorReason
from ledgers.domain.exceptions import (
    AccountNotFound,
    DuplicateAccount,
    InvalidAccountNumber,
    InvalidAmount,
)
from ledgers.domain.services import AccountService, LedgerService
from ledgers.stores.records import TxnStore

FAILURE_STATUS_CODES = {
    ErrorReason.ACCOUNT_NOT_FOUND: http_status.HTTP_400_BAD_REQUEST,
    ErrorReason.INSUFFICIENT_BALANCE: http_status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def invalid_body_response(errors):
    return api_response(
        detail=errors,
        message="Invalid request body.",
        status_code=http_status.HTTP_400_BAD_REQUEST,
        data=None,
    )


def execution_response(result, *, success_message):
    payload = {"transaction": TxnSerializer(result.txn).data}
    if result.succeeded:
        return api_response(
            detail="Transaction executed.",
            message=success_message,
            status_code=http_status.HTTP_201_CREATED,
            data=payload,
        )

    return api_response(
        detail=result.error_reason.value,
        message="Transaction failed.",
        status_code=FAILURE_STATUS_CODES.get(
            result.error_reason, http_status.HTTP_400_BAD_REQUEST
        ),
        data=payload,
    )


class AccountCreateAPIView(APIView):
    def post(self, request):
        serializer = OpenAccountRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_body_response(serializer.errors)

        try:
            account = AccountService.open_account(
                account_num=serializer.validated_data["account_num"],
                balance=serializer.validated_data["balance"],
            )
        except DuplicateAccount:
            return api_response(
                detail=ErrorReason.DUPLICATE_ACCOUNT.value,
                message="Account number is already taken.",
                status_code=http_status.HTTP_400_BAD_REQUEST,
                data=None,
            )
        except (InvalidAccountNumber, InvalidAmount) as exc:
            return api_response(
                detail=str(exc),
                message="Invalid account request.",
                status_code=http_status.HTTP_400_BAD_REQUEST,
                data=None,
            )

        return api_response(
            detail="Account created.",
            message="Account was opened successfully.",
            status_code=http_status.HTTP_201_CREATED,
            data={"account": AccountSerializer(account).data},
        )


class AccountDetailAPIView(APIView):
    def get(self, request, account_num):
        try:
            account = AccountService.get_account(account_num)
        except AccountNotFound:
            return api_response(
                detail=ErrorReason.ACCOUNT_NOT_FOUND.value,
                message="Account was not found.",
                status_code=http_status.HTTP_404_NOT_FOUND,
                data=None,
            )

        return api_response(
            detail="Account details fetched.",
            message="Account details retrieved successfully.",
            status_code=http_status.HTTP_200_OK,
            data={"account": AccountSerializer(account).data},
        )


class AccountDebitAPIView(APIView):
    def post(self, request, account_num):
        serializer = AmountRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_body_response(serializer.errors)

        try:
            result = LedgerService.debit(
                account_num, serializer.validated_data["amount"]
            )
        except (InvalidAccountNumber, InvalidAmount) as exc:
            return api_response(
                detail=str(exc),
                message="Invalid debit request.",
                status_code=http_status.HTTP_400_BAD_REQUEST,
                data=None,
            )

        return execution_response(result, success_message="Debit completed successfully.")


class AccountCreditAPIView(APIView):
    def post(self, request, account_num):
        serializer = AmountRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_body_response(serializer.errors)

        try:
            result = LedgerService.credit(
                account_num, serializer.validated_data["amount"]
            )
        except (InvalidAccountNumber, InvalidAmount) as exc:
            return api_response(
                detail=str(exc),
                message="Invalid credit request.",
                status_code=http_status.HTTP_400_BAD_REQUEST,
                data=None,
            )

        return execution_response(
            result, success_message="Credit completed successfully."
        )


class AccountTransferAPIView(APIView):
    def post(self, request, account_num):
        serializer = TransferRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_body_response(serializer.errors)

        try:
            result = LedgerService.transfer(
                account_num,
                serializer.validated_data["to"],
                serializer.validated_data["amount"],
            )
        except (InvalidAccountNumber, InvalidAmount) as exc:
            return api_response(
                detail=str(exc),
                message="Invalid transfer request.",
                status_code=http_status.HTTP_400_BAD_REQUEST,
                data=None,
            )

        return execution_response(
            result, success_message="Transfer completed successfully."
        )


class TxnDetailAPIView(APIView):
    def get(self, request, txn_id):
        txn = TxnStore().get(txn_id)
        if txn is None:
            return api_response(
                detail=f"txn={txn_id} not found",
                message="Transaction was not found.",
                status_code=http_status.HTTP_404_NOT_FOUND,
                data=None,
            )

        return api_response(
            detail="Transaction fetched.",
            message="Transaction retrieved successfully.",
            status_code=http_status.HTTP_200_OK,
            data={"transaction": TxnSerializer(txn).data},
        )
