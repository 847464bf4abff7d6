"""
Test suite for the geometry core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
