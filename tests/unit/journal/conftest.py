"""Shared fixtures for journal tests."""

import pytest

from pulse_journal.journal.csv_import import TradeImporter
from pulse_journal.journal.derive import derive_trades
from pulse_journal.journal.export import TradeExporter


@pytest.fixture
def derived(sample_trades):
    return derive_trades(sample_trades)


@pytest.fixture
def exporter():
    return TradeExporter(decimal_places=2)


@pytest.fixture
def importer(csv_config):
    return TradeImporter(csv_config)
