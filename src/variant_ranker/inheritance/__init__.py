"""
Inheritance Package - Mendelian Segregation Analysis.
"""

from variant_ranker.inheritance.analyser import InheritanceModeAnalyser

__all__ = ["InheritanceModeAnalyser"]
