"""Sourcify submission and the per-contract verification loop."""
