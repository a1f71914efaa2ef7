"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with stub steps and in-memory
adapters. Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_domain.py: Value objects, entities, analysis steps
    - test_filters.py / test_prioritisers.py: Bundled step units
    - test_filter_runner.py: Eager and sparse variant filtering
    - test_inheritance_analyser.py: Segregation analysis
    - test_gene_scorer.py: Raw and rank-based scoring
    - test_step_checker.py: Step ordering corrections
    - test_config_loader.py: Configuration loading/validation
"""
