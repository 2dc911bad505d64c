"""
Unit Tests for ChessDuel

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_rules.py

    # Run specific test
    pytest tests/test_rules.py::TestLegalMoves::test_starting_position_has_20_moves

Dependencies:
    - pytest: Test framework
    - chess (python-chess): Reference move generator for cross-checks
"""
