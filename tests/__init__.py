"""
Test suite for clamped-value

Contains:
- tests/unit/          : Unit tests for individual modules
"""
