"""
Interest Calculator

Accrued interest between two dates under seven banking day-count and
compounding conventions, with optional anticipative back-calculation.
All monetary arithmetic uses Decimal; amounts are rounded once, at output.
"""

__version__ = "1.0.0"
