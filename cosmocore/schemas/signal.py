"""
Signal Pydantic schemas for the Cosmocore API.

Handles validation of inbound webhook payloads. Only shape and type are
checked: pair, action and source are stored as sent.
"""

from decimal import Decimal

from pydantic import BaseModel


class SignalPayload(BaseModel):
    """
    Inbound trading-signal webhook body.

    Attributes:
        pair: Traded instrument identifier (e.g. "BTC/USD")
        action: Usually "buy" or "sell"; any string is accepted
        price: Exact decimal price, sent as a JSON string or number.
            Serialized back to a decimal string in JSON mode.
        source: Name of the alerting system that produced the signal
    """

    pair: str
    action: str
    price: Decimal
    source: str
