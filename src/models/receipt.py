"""Receipt (recorded rent payment) model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Receipt:
    """Rent payment recorded against one billing period.

    Several receipts may exist for the same tenant and billing period;
    their amounts add up.

    Attributes:
        tenant_id: Tenant the payment belongs to
        billing_period_key: Month the payment settles (e.g., "March 2024")
        amount_paid: Amount received (non-negative)
        paid_at: When the money was received, if known
        method: Payment channel (e.g., "M-PESA via Paybill", "Cash")
    """

    tenant_id: int
    billing_period_key: str
    amount_paid: Decimal
    paid_at: datetime | date | None = None
    method: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.amount_paid, Decimal):
            object.__setattr__(self, "amount_paid", Decimal(str(self.amount_paid)))

    def __repr__(self) -> str:
        return (
            f"<Receipt(tenant_id={self.tenant_id}, period={self.billing_period_key!r}, "
            f"amount_paid={self.amount_paid})>"
        )


__all__ = ["Receipt"]
