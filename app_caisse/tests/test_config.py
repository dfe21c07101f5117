from datetime import timezone

import pytest

from app_caisse.app_container import AppContainer
from app_caisse.config import load_settings, load_timezone
from app_caisse.repositories import InMemorySalesRepository


def test_timezone_defaults_to_utc(monkeypatch):
    monkeypatch.delenv('CAISSE_TIMEZONE', raising=False)
    assert load_settings().tz_name == 'UTC'
    assert load_timezone('UTC') is timezone.utc
    assert load_timezone('') is timezone.utc


def test_unknown_timezone_rejected():
    with pytest.raises(ValueError):
        load_timezone('Nowhere/Atlantis')


def test_container_passes_timezone_to_stats(monkeypatch):
    monkeypatch.setenv('CAISSE_TIMEZONE', 'UTC')
    container = AppContainer.build(sales_repo=InMemorySalesRepository())
    assert container.stats_service.tz is timezone.utc
