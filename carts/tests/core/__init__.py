"""Unit tests for core domain logic.

These tests exercise products, line items, carts and the registry
without any external dependencies.
"""
