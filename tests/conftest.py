"""
Shared fixtures for Quadboard tests.

No test touches the user's real data directory: file-backed tests use
pytest's tmp_path, everything else uses in-memory substrates.
"""

from datetime import date
from decimal import Decimal

import pytest

from quadboard.audit import AuditLogger
from quadboard.models.note import Note
from quadboard.orchestrator import Board
from quadboard.services.storage import (
    FileKeyValueStore,
    InMemoryAuditStorage,
    InMemoryKeyValueStore,
    PersistenceGateway,
)


@pytest.fixture
def note_factory():
    """Build notes with sensible defaults; override any field by keyword."""
    def make(**overrides) -> Note:
        fields = {
            "description": "Rent",
            "date": date(2024, 3, 1),
            "value": Decimal("1500.50"),
            "obs": "",
        }
        fields.update(overrides)
        return Note(**fields)
    return make


@pytest.fixture
def memory_substrate() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def file_substrate(tmp_path) -> FileKeyValueStore:
    return FileKeyValueStore(tmp_path / "data")


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage(max_events=100)


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def gateway(memory_substrate, audit_logger) -> PersistenceGateway:
    return PersistenceGateway(memory_substrate, audit_logger=audit_logger)


@pytest.fixture
def board(gateway, audit_logger) -> Board:
    """A board loaded from an empty substrate, saving on every change."""
    store, registry = gateway.load()
    return Board(store=store, registry=registry, gateway=gateway, audit_logger=audit_logger)
