"""
Scoopbook - Source Package

A small personal companion app for an ice cream kitchen:
a recipe book, a budget ledger and a pocket calculator.

DESIGN PRINCIPLES:
1. Each feature is independent and owns no shared state
2. Records live behind a swappable record store
3. The calculator is a pure state-transition function
4. Every change to stored records is auditable
"""

__version__ = "1.0.0"
__author__ = "Scoopbook Team"
