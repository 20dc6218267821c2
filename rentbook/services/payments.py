"""Monthly payment records and the history upsert."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

from rentbook.services.errors import ValidationError
from rentbook.services.months import parse_month_key
from rentbook.services.validation import require_amount


@dataclass(frozen=True)
class Payment:
    """One month's rent entry in a tenant's history."""

    month: str
    amount: int
    date: date
    paid: bool = False
    proof_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Document layout stored in the tenant's rent_history column."""
        return {
            "month": self.month,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "paid": self.paid,
            "proofUrl": self.proof_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Payment":
        return cls(
            month=data["month"],
            amount=data["amount"],
            date=_coerce_date(data["date"]),
            paid=bool(data.get("paid", False)),
            proof_url=data.get("proofUrl") or "",
        )


def _coerce_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # Accept full ISO timestamps as well as plain dates
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise ValidationError(f"Invalid payment date: {value!r}") from e


def normalize_paid(value: bool | str) -> bool:
    """Normalize a submitted paid flag to a strict boolean.

    Forms post "true"/"false" strings; JSON clients post booleans.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    raise ValidationError(f"paid must be a boolean or 'true'/'false', got {value!r}")


def validate_payment(payment: Payment) -> None:
    """Check a payment before it is merged into a history.

    Raises:
        ValidationError: Malformed month key, amount outside 0..MAX_AMOUNT,
            missing date, or non-boolean paid flag
    """
    if not payment.month:
        raise ValidationError("Payment month is required")
    parse_month_key(payment.month)
    require_amount("Payment amount", payment.amount)
    if not isinstance(payment.date, date):
        raise ValidationError("Payment date is required")
    if not isinstance(payment.paid, bool):
        raise ValidationError("Payment paid flag must be a boolean")


def find_payment(history: Iterable[Payment], month: str) -> Payment | None:
    return next((entry for entry in history if entry.month == month), None)


def upsert_payment(history: Iterable[Payment], payment: Payment) -> list[Payment]:
    """Merge a payment into a history keyed by month.

    An entry for the same month is replaced in place, otherwise the payment is
    appended. The result is sorted newest month first. The input is not
    modified; the caller persists the returned list.

    Raises:
        ValidationError: If the payment is invalid (nothing is changed)
    """
    validate_payment(payment)

    updated = list(history)
    for index, entry in enumerate(updated):
        if entry.month == payment.month:
            updated[index] = payment
            break
    else:
        updated.append(payment)

    updated.sort(key=lambda entry: entry.month, reverse=True)
    return updated


__all__ = ["Payment", "find_payment", "normalize_paid", "upsert_payment", "validate_payment"]
