"""Test suite for llamachat.

Unit tests live under unit/<domain>/ and use fake process spawners from the
helpers/ subpackage so no inference binary is needed.
"""
