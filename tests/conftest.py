from __future__ import annotations

import pytest

from aad_logprob.aad import use_tape


@pytest.fixture
def tape():
    """A fresh active tape for the duration of one test."""
    with use_tape() as t:
        yield t
