"""Verify Truffle build artifacts on Sourcify."""

__version__ = "0.4.0"

__all__ = ["__version__"]
