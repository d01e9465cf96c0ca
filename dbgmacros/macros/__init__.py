"""Debug macro expansion."""

from .options import (NormalizedOptions, DebugToolsOptions, EnvFlagsOptions,
                      ExternalizeHelpers, HelperMode)
from .builder import MacroKind, MacroUsageError, ExpressionBuilder, SUPPORTED_MACROS
from .expander import (MacroExpander, MacroBinding, ImportScan, PendingExpansion,
                       scan_imports, substitute_env_flags, recognize_and_queue,
                       apply_expansions, clean_imports)

__all__ = [
    'NormalizedOptions', 'DebugToolsOptions', 'EnvFlagsOptions', 'ExternalizeHelpers', 'HelperMode',
    'MacroKind', 'MacroUsageError', 'ExpressionBuilder', 'SUPPORTED_MACROS',
    'MacroExpander', 'MacroBinding', 'ImportScan', 'PendingExpansion',
    'scan_imports', 'substitute_env_flags', 'recognize_and_queue',
    'apply_expansions', 'clean_imports',
]
