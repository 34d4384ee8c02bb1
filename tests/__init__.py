"""
Test suite for cachematrix

Contains:
- tests/unit/          : Unit tests for individual modules
"""
