"""
Test suite for mathfix

Contains:
- tests/unit/          : Unit tests for individual modules
"""
