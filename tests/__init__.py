"""
Test suite for hyperdrive-fees

Contains:
- tests/unit/          : Unit tests for individual modules
"""
