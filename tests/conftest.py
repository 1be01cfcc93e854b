"""Shared fixtures: in-memory storage, a fixed 'today' and a controller factory."""

import itertools
from datetime import date

import pytest

from moneymap.audit import AuditLogger
from moneymap.config import AppSettings, StorageSettings
from moneymap.controller import ExpenseTrackerController
from moneymap.services.storage import InMemoryKeyValueStore, StorageAdapter
from moneymap.store import IdGenerator


TODAY = date(2024, 1, 20)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def audit_logger():
    return AuditLogger()


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def storage_settings():
    return StorageSettings()


@pytest.fixture
def app_settings():
    return AppSettings()


@pytest.fixture
def adapter(kv_store, storage_settings, audit_logger):
    return StorageAdapter(kv_store, storage_settings, audit_logger)


@pytest.fixture
def make_controller(adapter, app_settings, audit_logger, today):
    """Build a controller over the shared in-memory store."""

    def _make(current_day: date = today) -> ExpenseTrackerController:
        return ExpenseTrackerController(
            storage=adapter,
            app_settings=app_settings,
            audit_logger=audit_logger,
            today_provider=lambda: current_day,
            id_generator=IdGenerator(clock=itertools.count(1_700_000_000_000).__next__),
        )

    return _make


@pytest.fixture
def controller(make_controller):
    return make_controller()
