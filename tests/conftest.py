from __future__ import annotations

import pytest
from kudos.context import Context
from kudos.ledger.keeper import Keeper
from kudos.module import KudosModule
from kudos.store.memory import MemoryKVStore

from tests.helpers import GENESIS_TIME


@pytest.fixture
def store() -> MemoryKVStore:
    return MemoryKVStore()


@pytest.fixture
def ctx(store: MemoryKVStore) -> Context:
    return Context(store=store, block_time=GENESIS_TIME)


@pytest.fixture
def keeper() -> Keeper:
    return Keeper()


@pytest.fixture
def module(store: MemoryKVStore) -> KudosModule:
    return KudosModule(store)
