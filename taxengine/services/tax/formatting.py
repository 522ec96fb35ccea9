from decimal import Decimal


def format_naira(amount) -> str:
    """₦ with thousands separators; kobo shown only when present."""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return f"₦{amount:,.0f}"
    return f"₦{amount:,.2f}"
