"""
Performance Tests.

Benchmarks for Variant Ranker performance requirements:
    - 1600 variants < 5 seconds in both analysis modes
    - 8000 streamed variants < 10 seconds
    - Track execution time per step
"""
