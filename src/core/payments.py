"""
Payment gateway callback verification and settlement rules.

A callback is only trusted once its signature matches
HMAC-SHA256(secret, "<order_id>|<payment_id>") as lowercase hex. A mismatch is
final: the caller must reject the callback without touching any booking or
team payment state.

Crediting must happen at most once per payment_id. These functions do not
track which payments were already applied; the caller has to guarantee it,
for example with a unique index on the payment reference or a conditional
update keyed on it, so a retried callback cannot credit twice.
"""
import hashlib
import hmac
import logging
from typing import Dict

from core.models import InvalidArgument, PaymentCallback

logger = logging.getLogger(__name__)

BOOKING_ADVANCE_PAID = 'advance_paid'
BOOKING_COMPLETED = 'completed'

TEAM_PAID = 'paid'
TEAM_PARTIAL = 'partial'


class PaymentVerificationError(Exception):
    """Raised when a callback's signature does not match."""


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    message = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode('utf-8'), message.encode('utf-8'), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    """Return True only if signature is exactly the expected hex digest."""
    if not secret:
        raise InvalidArgument("Payment gateway not configured")
    if not order_id or not payment_id or not signature:
        return False
    expected = compute_signature(secret, order_id, payment_id)
    return hmac.compare_digest(expected.encode('utf-8'), signature.encode('utf-8'))


def require_valid_signature(callback: PaymentCallback, secret: str) -> PaymentCallback:
    """Verify a callback, raising PaymentVerificationError on mismatch."""
    logger.info(f'Verifying payment: {callback.payment_id}')
    if not verify_payment_signature(callback.order_id, callback.payment_id, callback.signature, secret):
        logger.warning(f'Signature mismatch for order {callback.order_id}, payment {callback.payment_id}')
        raise PaymentVerificationError("Payment verification failed")
    return callback


def booking_payment_status(is_advance: bool) -> str:
    """Payment status a verified booking payment moves to."""
    return BOOKING_ADVANCE_PAID if is_advance else BOOKING_COMPLETED


def apply_team_payment(total_paid: float, amount: float, total_fee: float) -> Dict:
    """
    Add a verified payment to a tournament team's running total.

    Returns dict with the new total_paid and payment_status ('paid' once the
    fee is covered, 'partial' otherwise).
    """
    if amount <= 0:
        raise InvalidArgument(f"Payment amount must be positive: {amount}")
    if total_fee is None:
        raise InvalidArgument("Tournament entry fee is not set")
    new_total = (total_paid or 0) + amount
    return {
        'total_paid': new_total,
        'payment_status': TEAM_PAID if new_total >= total_fee else TEAM_PARTIAL,
    }


def payment_purpose(is_advance: bool, balance: bool = False) -> str:
    if balance:
        return 'tournament_entry_balance'
    return 'tournament_entry_advance' if is_advance else 'tournament_entry_full'
