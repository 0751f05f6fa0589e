"""
Core modules for Balance Guard.

This package contains the charge authorization and reset logic.
"""
