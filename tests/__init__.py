"""
Test suite for the course portfolio showcase.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_pattern_resolver.py -v
"""
