"""Quick-fix procedures and the executor that applies them."""

from diag_assist.fixes.executor import DEFAULT_BACKUP_SUFFIX, FixExecutor, read_source_text
from diag_assist.fixes.registry import FixProcedure, get_fix, list_fixes

__all__ = [
    "DEFAULT_BACKUP_SUFFIX",
    "FixExecutor",
    "FixProcedure",
    "get_fix",
    "list_fixes",
    "read_source_text",
]
