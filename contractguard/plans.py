"""Pricing catalog shown on the pricing page. Checkout itself is handled elsewhere."""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    description: str
    price_id: str
    price: int
    mode: str                  # "payment" | "subscription"
    interval: str | None = None  # "month" | "year" for subscriptions
    popular: bool = False
    features: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["features"] = list(self.features)
        d["formatted_price"] = format_price(self.price, self.mode, self.interval)
        return d


PLANS = [
    Plan(
        id="prod_Sdz8PGwuqtqf8P",
        name="Pay Per Check",
        description="One comprehensive contract review",
        price_id="price_1RihAMH9UjiUVq1X9N2VniYs",
        price=25,
        mode="payment",
        popular=True,
        features=(
            "Comprehensive risk analysis",
            "Detailed explanations",
            "Revision suggestions",
            "Export functionality",
            "Side-by-side comparison",
            "Priority processing",
        ),
    ),
    Plan(
        id="prod_Sdz9MO674hKLsu",
        name="Pro",
        description="",
        price_id="price_1RihBPH9UjiUVq1X9YN1izl7",
        price=39,
        mode="subscription",
        interval="month",
        features=(
            "Unlimited contract analysis",
            "Priority support",
            "Contract templates",
            "Advanced analytics",
            "Bulk processing",
            "API access",
            "Custom integrations",
        ),
    ),
]


def get_plan(plan_id: str) -> Plan | None:
    return next((p for p in PLANS if p.id == plan_id), None)


def format_price(price, mode: str, interval: str | None = None) -> str:
    if price == 0:
        return "Free"
    formatted = f"${price}"
    if mode == "subscription" and interval:
        return f"{formatted}/{'mo' if interval == 'month' else 'yr'}"
    return formatted
