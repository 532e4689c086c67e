from __future__ import annotations

import pytest

from tests.helpers import FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
