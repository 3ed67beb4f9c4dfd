"""Test fakes for process invocation."""

from tests.fakes.fake_runner import FakeRunner, make_which

__all__ = [
    "FakeRunner",
    "make_which",
]
