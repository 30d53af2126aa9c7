"""
PURPOSE: Unit tests for SignalService and the SignalPayload schema.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from cosmocore.schemas.signal import SignalPayload
from cosmocore.services.signal_service import SignalService


class TestSignalPayloadSchema:
    """Test SignalPayload Pydantic schema."""

    def test_payload_valid(self):
        """Test a well-formed payload."""
        payload = SignalPayload(pair="BTC/USD", action="buy", price="65000.50", source="TradingView")
        assert payload.pair == "BTC/USD"
        assert payload.price == Decimal("65000.50")

    def test_payload_price_keeps_trailing_zero(self):
        """Test the decimal string is not normalized."""
        payload = SignalPayload(pair="BTC/USD", action="buy", price="65000.50", source="tv")
        assert str(payload.price) == "65000.50"

    def test_payload_action_free_text(self):
        """Test action accepts values other than buy/sell."""
        payload = SignalPayload(pair="X", action="HOLD", price=1, source="s")
        assert payload.action == "HOLD"

    def test_payload_missing_source(self):
        """Test source is required."""
        with pytest.raises(ValidationError) as exc_info:
            SignalPayload(pair="BTC/USD", action="buy", price="1")
        assert "source" in str(exc_info.value)


class TestBuildRawPayload:
    """Test the raw payload document."""

    def test_raw_payload_fields(self):
        """Test the document is the four fields, price as a decimal string."""
        payload = SignalPayload(pair="BTC/USD", action="sell", price="0.0001", source="tv")

        assert SignalService.build_raw_payload(payload) == {
            "pair": "BTC/USD",
            "action": "sell",
            "price": "0.0001",
            "source": "tv",
        }

    def test_raw_payload_falls_back_to_none(self, monkeypatch):
        """Test a serialization failure yields None instead of raising."""
        payload = SignalPayload(pair="BTC/USD", action="sell", price="1", source="tv")

        def boom(*args, **kwargs):
            raise PydanticSerializationError("cannot serialize")

        monkeypatch.setattr(SignalPayload, "model_dump", boom)

        assert SignalService.build_raw_payload(payload) is None


@pytest.mark.asyncio
class TestRecordSignal:
    """Test SignalService.record_signal against the database."""

    async def test_record_signal_returns_row(self, app, fetch_signals):
        """Test the returned row matches what was stored."""
        payload = SignalPayload(pair="SOL/USD", action="buy", price="142.75", source="tv")

        async with app.state.session_factory() as session:
            signal = await SignalService.record_signal(session, payload)

        rows = await fetch_signals()
        assert len(rows) == 1
        assert rows[0].id == signal.id
        assert rows[0].price == Decimal("142.75")
        assert rows[0].bot_id is None

    async def test_record_signal_stores_null_document_on_serialization_failure(
        self, app, fetch_signals, monkeypatch
    ):
        """Test the signal is still stored when the raw document cannot be built."""
        monkeypatch.setattr(SignalService, "build_raw_payload", staticmethod(lambda payload: None))
        payload = SignalPayload(pair="SOL/USD", action="buy", price="142.75", source="tv")

        async with app.state.session_factory() as session:
            await SignalService.record_signal(session, payload)

        rows = await fetch_signals()
        assert len(rows) == 1
        assert rows[0].raw_payload is None
        assert rows[0].pair == "SOL/USD"
