"""
Directive specification and metadata models

Defines the structure and categories of mexpand directives for the
registry and for documentation of the keyword table.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class DirectiveCategory(Enum):
    """
    Categories of mexpand directives

    Tells how a directive's result reaches the output.
    """
    EMISSION = "emission"      # {{ env }}, {{ var }}, {{ clip }} - written straight to output
    INJECTION = "injection"    # {{ exec }}, {{ file }} - spliced back into the scan buffer
    STORE = "store"            # {{ let }} - updates the variable store only


@dataclass(frozen=True)
class DirectiveSpec:
    """
    Specification for a mexpand directive

    Attributes:
        name: Directive keyword (exact, case-sensitive)
        category: How the directive produces its result
        description: Human-readable description
        handler: Scan step (template) -> ScanState
        examples: Example usage strings
    """
    name: str
    category: DirectiveCategory
    description: str
    handler: Callable
    examples: List[str] = field(default_factory=list)

    def rescans(self) -> bool:
        """True if this directive's result is scanned again for directives"""
        return self.category == DirectiveCategory.INJECTION

