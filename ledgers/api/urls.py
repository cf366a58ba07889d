from django.urls import path

from ledgers.api.views import (
    AccountCreateAPIView,
    AccountCreditAPIView,
    AccountDebitAPIView,
    AccountDetailAPIView,
    AccountTransferAPIView,
    TxnDetailAPIView,
)

urlpatterns = [
    path("accounts/", AccountCreateAPIView.as_view(), name="account-create"),
    path(
        "accounts/<str:account_num>/",
        AccountDetailAPIView.as_view(),
        name="account-detail",
    ),
    path(
        "accounts/<str:account_num>/debit/",
        AccountDebitAPIView.as_view(),
        name="account-debit",
    ),
    path(
        "accounts/<str:account_num>/credit/",
        AccountCreditAPIView.as_view(),
        name="account-credit",
    ),
    path(
        "accounts/<str:account_num>/transfer/",
        AccountTransferAPIView.as_view(),
        name="account-transfer",
    ),
    path(
        "transactions/<uuid:txn_id>/",
        TxnDetailAPIView.as_view(),
        name="transaction-detail",
    ),
]
