SLOT_LETTERS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
MAX_SLOTS = len(SLOT_LETTERS) * (len(SLOT_LETTERS) + 1)  # "Team A" .. "Team ZZ"

# Indexed by date.weekday() (Monday == 0)
WEEKDAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


class InvalidArgument(ValueError):
    """Raised when a domain rule is given input it cannot compute from."""


def get_slot_label(index: int) -> str:
    """Get the bracket slot label for a zero-based slot index."""
    if index < 0 or index >= MAX_SLOTS:
        raise InvalidArgument(f"Slot index out of range: {index}")
    if index < 26:
        return f"Team {SLOT_LETTERS[index]}"
    first = index // 26 - 1
    second = index % 26
    return f"Team {SLOT_LETTERS[first]}{SLOT_LETTERS[second]}"


class Team:
    def __init__(self, team_id, name):
        self.team_id = team_id
        self.name = name

    @classmethod
    def from_dict(cls, data):
        team_id = data.get('team_id', data.get('id'))
        name = data.get('team_name', data.get('name'))
        if team_id is None or name is None:
            raise InvalidArgument(f"Team needs an id and a name: {data}")
        return cls(team_id, name)

    def __repr__(self):
        return f"Team(team_id={self.team_id}, name={self.name})"


def normalize_days(days):
    """
    Validate a rule's weekday names, returning them as a list.

    A single name is taken as a one-day list and case is ignored
    ("saturday" -> "Saturday"); abbreviations and unknown names are rejected.
    """
    if isinstance(days, str):
        days = [days]
    normalized = []
    for day in days:
        name = day.strip().capitalize() if isinstance(day, str) else None
        if name not in WEEKDAY_NAMES:
            raise InvalidArgument(f"Unknown weekday in pricing rule: {day!r}")
        normalized.append(name)
    if not normalized:
        raise InvalidArgument("Pricing rule needs at least one day")
    return normalized


class PricingRule:
    def __init__(self, days, start_time, end_time, price_per_hour):
        self.days = normalize_days(days)
        self.start_time = start_time
        self.end_time = end_time  # exclusive
        self.price_per_hour = price_per_hour

    @classmethod
    def from_dict(cls, data):
        """Build a rule from stored JSON (camelCase) or YAML config (snake_case)."""
        fields = {
            'days': data.get('days'),
            'start_time': data.get('startTime', data.get('start_time')),
            'end_time': data.get('endTime', data.get('end_time')),
            'price_per_hour': data.get('pricePerHour', data.get('price_per_hour')),
        }
        missing = [key for key, value in fields.items() if value is None]
        if missing:
            raise InvalidArgument(f"Pricing rule is missing {', '.join(missing)}: {data}")
        return cls(**fields)

    def __repr__(self):
        return (f"PricingRule(days={self.days}, start_time={self.start_time}, "
                f"end_time={self.end_time}, price_per_hour={self.price_per_hour})")


class PaymentCallback:
    def __init__(self, order_id, payment_id, signature):
        self.order_id = order_id
        self.payment_id = payment_id
        self.signature = signature

    @classmethod
    def from_dict(cls, data):
        """Accept either the gateway's field names or plain ones."""
        return cls(
            order_id=data.get('razorpay_order_id', data.get('order_id')),
            payment_id=data.get('razorpay_payment_id', data.get('payment_id')),
            signature=data.get('razorpay_signature', data.get('signature')),
        )

    def __repr__(self):
        return f"PaymentCallback(order_id={self.order_id}, payment_id={self.payment_id})"
