"""
Test Suite for Variant Ranker.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: End-to-end analysis runs
    - performance/: Benchmarks on synthetic cohorts
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest -m "not slow"                    # Skip large cohorts
"""
