from __future__ import annotations

import pytest

from househelp.infrastructure.backend.memory_backend import MemoryBackend
from househelp.infrastructure.backend.memory_procedures import build_memory_backend
from househelp.infrastructure.backend.seed_data import SEED_TABLES


@pytest.fixture
def backend() -> MemoryBackend:
    return build_memory_backend(SEED_TABLES)
