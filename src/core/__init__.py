"""
Core domain models and mathematical primitives.

This module contains the matrix building blocks and the linear-algebra
capability that the cache layer delegates to.
"""
