"""Tests for the stock ledger."""

import pytest

from src.core.exceptions import InsufficientStockError, PartNotFoundError
from src.core.services.stock_ledger import StockLedger, consumption_deltas


@pytest.fixture
def ledger() -> StockLedger:
    return StockLedger()


def test_consumption_deltas_negates_and_drops_zero():
    assert consumption_deltas({"a": 3, "b": 0, "c": 1}) == {"a": -3, "c": -1}


class TestValidate:
    def test_exact_stock_allowed(self, ledger, sample_part):
        ledger.validate({sample_part.id: sample_part}, {sample_part.id: -10})

    def test_over_consumption_rejected(self, ledger, sample_part):
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.validate({sample_part.id: sample_part}, {sample_part.id: -11})
        assert exc_info.value.available == 10
        assert exc_info.value.requested == 11

    def test_returns_always_allowed(self, ledger, second_part):
        ledger.validate({second_part.id: second_part}, {second_part.id: 50})

    def test_unread_part_rejected(self, ledger):
        with pytest.raises(PartNotFoundError):
            ledger.validate({}, {"ghost": -1})


class TestReserve:
    async def test_reads_validates_then_writes(self, ledger, mock_tx, sample_part, second_part):
        mock_tx.get_parts.return_value = {sample_part.id: sample_part, second_part.id: second_part}

        await ledger.reserve(mock_tx, {sample_part.id: -2, second_part.id: -3})

        mock_tx.get_parts.assert_awaited_once()
        assert mock_tx.adjust_stock.await_count == 2
        mock_tx.adjust_stock.assert_any_await(sample_part.id, -2)
        mock_tx.adjust_stock.assert_any_await(second_part.id, -3)

    async def test_failure_writes_nothing(self, ledger, mock_tx, sample_part, second_part):
        mock_tx.get_parts.return_value = {sample_part.id: sample_part, second_part.id: second_part}

        with pytest.raises(InsufficientStockError):
            await ledger.reserve(mock_tx, {sample_part.id: -2, second_part.id: -4})

        mock_tx.adjust_stock.assert_not_awaited()

    async def test_missing_part(self, ledger, mock_tx, sample_part):
        mock_tx.get_parts.return_value = {sample_part.id: sample_part}

        with pytest.raises(PartNotFoundError):
            await ledger.reserve(mock_tx, {sample_part.id: -1, "ghost": -1})

        mock_tx.adjust_stock.assert_not_awaited()
