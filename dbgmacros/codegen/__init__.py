"""Code generator - prints the AST as JavaScript source."""

from .codegen import CodeGenerator, generate

__all__ = ['CodeGenerator', 'generate']
