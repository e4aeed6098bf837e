"""
Shared fixtures for the tcforth test suite.

Every test gets a fresh interpreter whose output channel is an
in-memory buffer, so printed text can be asserted on directly.
"""

import io

import pytest

from tcforth import InteractiveForth


@pytest.fixture
def forth():
    return InteractiveForth(output=io.StringIO())


@pytest.fixture
def output(forth):
    """Callable returning everything the interpreter has written so far"""
    return forth.output.getvalue
