"""
Test fixtures and helpers for macro expansion tests.

TransformAssertion is a fluent helper: configure the expander options,
then assert on the generated source, the warnings, or the error raised.

    AssertTransform('''
        import { warn } from '@ember/debug';
        warn('careful');
    ''').outputs("(false && console.warn('careful'));")
"""

import re
import textwrap
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from dbgmacros.compiler import MacroCompiler
from dbgmacros.macros import (NormalizedOptions, DebugToolsOptions, EnvFlagsOptions,
                              ExternalizeHelpers, MacroUsageError)

DEBUG_TOOLS = '@ember/debug'
ENV_FLAGS = '@glimmer/env'


@dataclass
class TransformResult:
    """Result of running the compiler over one source string."""
    output: str = ""
    warnings: List[str] = field(default_factory=list)


class TransformAssertion:
    """Fluent assertion helper for macro expansion."""

    def __init__(self, source: str):
        self.source = textwrap.dedent(source)
        self.debug_tools_source: Optional[str] = DEBUG_TOOLS
        self.env_flags_source: Optional[str] = None
        self.flag_name: Optional[str] = None
        self.is_debug = False
        self.predicate_index: Optional[int] = None
        self.module = False
        self.global_namespace: Optional[str] = None
        self.feature_sources: List[str] = []
        self.expected_warnings: Optional[List[str]] = None
        self.expect_no_warnings = False

    def in_debug(self) -> 'TransformAssertion':
        self.is_debug = True
        return self

    def with_debug_tools(self, source: Optional[str]) -> 'TransformAssertion':
        self.debug_tools_source = source
        return self

    def with_env_flags(self, source: str = ENV_FLAGS, flag_name: str = 'DEBUG') -> 'TransformAssertion':
        self.env_flags_source = source
        self.flag_name = flag_name
        return self

    def with_predicate_index(self, index: int) -> 'TransformAssertion':
        self.predicate_index = index
        return self

    def externalized_to_module(self) -> 'TransformAssertion':
        self.module = True
        return self

    def with_global_namespace(self, namespace: str) -> 'TransformAssertion':
        self.global_namespace = namespace
        return self

    def with_feature_source(self, source: str) -> 'TransformAssertion':
        self.feature_sources.append(source)
        return self

    def with_warnings(self, *codes: str) -> 'TransformAssertion':
        self.expected_warnings = list(codes)
        return self

    def without_warnings(self) -> 'TransformAssertion':
        self.expect_no_warnings = True
        return self

    def options(self) -> NormalizedOptions:
        return NormalizedOptions(
            feature_sources=frozenset(self.feature_sources),
            debug_tools=DebugToolsOptions(self.debug_tools_source, self.predicate_index, self.is_debug),
            env_flags=EnvFlagsOptions(self.env_flags_source, self.flag_name),
            externalize_helpers=ExternalizeHelpers(self.module, self.global_namespace),
        )

    def _transform(self) -> TransformResult:
        compiler = MacroCompiler(self.options())
        output = compiler.compile_string(self.source, "test.js")
        return TransformResult(output, compiler.get_warnings())

    def outputs(self, expected: str) -> TransformResult:
        """Assert the generated source, ignoring surrounding blank lines."""
        result = self._transform()
        expected = textwrap.dedent(expected).strip()
        actual = result.output.strip()
        assert actual == expected, f"Expected:\n{expected}\nGot:\n{actual}"
        self._check_warnings(result)
        return result

    def generates_code_matching(self, pattern: str) -> 'TransformAssertion':
        result = self._transform()
        assert re.search(pattern, result.output, re.MULTILINE), \
            f"Generated code does not match pattern '{pattern}'\nCode:\n{result.output}"
        self._check_warnings(result)
        return self

    def generates_code_not_matching(self, pattern: str) -> 'TransformAssertion':
        result = self._transform()
        assert not re.search(pattern, result.output, re.MULTILINE), \
            f"Generated code should not match pattern '{pattern}'\nCode:\n{result.output}"
        return self

    def raises(self, error_type=MacroUsageError, match: Optional[str] = None) -> Exception:
        """Assert that expansion fails; returns the exception."""
        with pytest.raises(error_type, match=match) as info:
            self._transform()
        return info.value

    def _check_warnings(self, result: TransformResult) -> None:
        if self.expect_no_warnings:
            assert not result.warnings, f"Expected no warnings, got: {result.warnings}"
        elif self.expected_warnings is not None:
            for code in self.expected_warnings:
                assert any(w.startswith(code) for w in result.warnings), \
                    f"Expected warning {code}, got {result.warnings}"


def AssertTransform(source: str) -> TransformAssertion:
    """Create a transform assertion."""
    return TransformAssertion(source)

