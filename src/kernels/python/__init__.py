"""
Python pricing kernels.

These modules are designed to be:
- easy to audit (explicit formulas, one expression per rule),
- small surface-area (pure functions, integers in and out),
- explicit about rounding (truncation toward zero after a float ratio).
"""
