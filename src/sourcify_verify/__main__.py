#!/usr/bin/env python3
"""
Main entry point for the package.
Allows running the verifier with: python -m sourcify_verify run sourcify ...
"""

from .cli.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
