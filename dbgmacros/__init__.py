"""
Debug macro expander (dbgmacros) - Compiles away debug-tools macros in ES modules.

Rewrites calls to ``assert``, ``warn``, ``log`` and ``deprecate`` imported
from a debug-tools module into expressions guarded by a compile-time debug
flag, and removes the imports that are no longer needed.
"""

__version__ = "0.1.0"
__author__ = "dbgmacros Project"
