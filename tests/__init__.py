"""
Test suite for decimal128

Contains:
- tests/unit/          : Unit tests for individual modules
"""
