"""Errors raised by the ledger services."""


class LedgerError(Exception):
    """Base error for ledger reconciliation."""


class ReceiptTenantMismatchError(LedgerError):
    """A receipt handed to a per-tenant computation belongs to another tenant.

    Receipts must be partitioned per tenant by the caller; this error
    surfaces a collaborator that forgot to filter.
    """

    def __init__(self, tenant_id: int, receipt_tenant_id: int):
        self.tenant_id = tenant_id
        self.receipt_tenant_id = receipt_tenant_id
        super().__init__(
            f"Receipt for tenant {receipt_tenant_id} passed to ledger of tenant {tenant_id}"
        )


__all__ = ["LedgerError", "ReceiptTenantMismatchError"]
