"""
Core domain models, mathematical primitives, and invariants.

This module contains the BigNumber value type, its error taxonomy,
native integer widths and the JSON contract layer.
"""
