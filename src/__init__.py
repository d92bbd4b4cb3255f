"""
mexpand - Template macro expander

Scans text for {{ ... }} directives and replaces them with environment
values, clipboard text, shell-command output, file contents and variables.
"""

__version__ = "1.0.0"

from .lib import Template, expand_text, Expander, DirectiveRegistry, HostServices, LOG, state_connectToLogger

__all__ = [
    "Template",
    "expand_text",
    "Expander",
    "DirectiveRegistry",
    "HostServices",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
