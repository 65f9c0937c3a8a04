"""Shared fakes for tests."""

from .process import FakeProcess, FakeSpawner, FakeStdin
from .descriptors import descriptor_for, make_request

__all__ = ["FakeProcess", "FakeSpawner", "FakeStdin", "descriptor_for", "make_request"]
