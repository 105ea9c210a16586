"""Test suite for the cart system.

Organized into two categories:

1. core/: Unit tests for core domain logic
   - No external dependencies, fast execution

2. Top level: Configuration and composition root tests
   - Exercise pydantic-settings loading and registry wiring
"""
