"""
Integration Tests - End-to-End Analysis Tests.

These tests verify that all components work together correctly.
Integration tests use the MockSampleDataFactory to avoid reading real
VCF files while testing the full workflow.

Test Files:
    - test_pipeline_executor.py: FULL and PASS_ONLY runs
    - test_pipeline_with_registry.py: Analysis wired from YAML configuration
"""
