"""ES module parser - Builds Abstract Syntax Tree from tokens."""

from .parser import Parser, parse
from .ast_nodes import *
from .scope import Scope, Binding, ScopeWalker

__all__ = ['Parser', 'parse', 'Scope', 'Binding', 'ScopeWalker']
