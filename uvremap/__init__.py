"""Derive the affine transform between two UV marker layouts."""

__version__ = "0.1.0"
