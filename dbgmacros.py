#!/usr/bin/env python3
"""
Debug macro compiler entry point.

Usage: python dbgmacros.py input.js [-o output.js] [--debug-tools SOURCE]
"""

from dbgmacros.compiler import main

if __name__ == '__main__':
    main()
