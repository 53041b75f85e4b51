"""Plain-text rendering of purchase inquiries."""

from decimal import Decimal

from limbo.domain.notification.model import PurchaseInquiry

PRICE_ON_REQUEST = "On request"


def format_price(price: Decimal | None) -> str:
    """Format a rouble price with space-grouped thousands, e.g. ``150 000 RUB``."""
    if not price:
        return PRICE_ON_REQUEST
    text = f"{price:,.2f}".rstrip("0").rstrip(".")
    return f"{text.replace(',', ' ')} RUB"


def render_inquiry(inquiry: PurchaseInquiry, artist_name: str) -> str:
    customer = inquiry.customer
    lines = [
        "🖼 NEW PURCHASE INQUIRY!",
        "",
        f"Work: {inquiry.work_title or '-'}",
        f"Artist: {artist_name}",
        f"Price: {format_price(inquiry.price)}",
        "",
        "CUSTOMER:",
        f"👤 Name: {customer.full_name}",
        f"📞 Phone: {customer.phone}",
    ]
    if customer.telegram:
        lines.append(f"✈️ Telegram: {customer.telegram}")
    if customer.comment:
        lines.extend(["", "💬 Comment:", customer.comment])
    return "\n".join(lines) + "\n"
