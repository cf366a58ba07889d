from django.contrib import admin

from ledgers.models import Account, Txn, TxnEntry


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("id", "account_num", "balance", "created_at", "updated_at")
    search_fields = ("account_num",)
    readonly_fields = ("balance",)


class TxnEntryInline(admin.TabularInline):
    model = TxnEntry
    extra = 0
    can_delete = False
    readonly_fields = ("position", "account_num", "amount")


@admin.register(Txn)
class TxnAdmin(admin.ModelAdmin):
    list_display = ("id", "status", "error_reason", "created_at", "updated_at")
    list_filter = ("status", "error_reason")
    search_fields = ("id", "entries__account_num")
    readonly_fields = ("id", "status", "error_reason", "created_at", "updated_at")
    inlines = [TxnEntryInline]
