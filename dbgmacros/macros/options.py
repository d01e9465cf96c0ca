"""
Expander configuration.

Options arrive already normalized: the caller (or the command line driver)
decides every value, and nothing here fills in defaults beyond the
dataclass ones.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class HelperMode(Enum):
    """Where expanded macro calls send their output."""
    CONSOLE = 'console'   # console.warn(...), console.assert(...)
    MODULE = 'module'     # keep calling the imported helpers
    GLOBAL = 'global'     # NS.warn(...) on a global namespace object


@dataclass(frozen=True)
class DebugToolsOptions:
    """The module that exports the debug macros."""
    import_source: Optional[str] = None
    # Argument of assert() hoisted into the guard and replaced by `false`
    assert_predicate_index: Optional[int] = None
    # Resolved value of the compile-time debug flag
    is_debug: bool = False


@dataclass(frozen=True)
class EnvFlagsOptions:
    """The module that exports the boolean debug flag."""
    import_source: Optional[str] = None
    flag_name: Optional[str] = None


@dataclass(frozen=True)
class ExternalizeHelpers:
    module: bool = False
    global_namespace: Optional[str] = None

    @property
    def mode(self) -> HelperMode:
        if self.global_namespace:
            return HelperMode.GLOBAL
        if self.module:
            return HelperMode.MODULE
        return HelperMode.CONSOLE

    @property
    def keeps_import(self) -> bool:
        """Expanded calls still reference the debug-tools module."""
        return self.module


@dataclass(frozen=True)
class NormalizedOptions:
    feature_sources: FrozenSet[str] = frozenset()
    debug_tools: DebugToolsOptions = field(default_factory=DebugToolsOptions)
    env_flags: EnvFlagsOptions = field(default_factory=EnvFlagsOptions)
    externalize_helpers: ExternalizeHelpers = field(default_factory=ExternalizeHelpers)

    def __repr__(self):
        return (f"NormalizedOptions(debug_tools={self.debug_tools.import_source!r}, "
                f"env_flags={self.env_flags.import_source!r}, "
                f"mode={self.externalize_helpers.mode.value}, "
                f"debug={self.debug_tools.is_debug})")
