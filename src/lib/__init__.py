"""
mexpand - Template macro expander

Expands {{ ... }} directives with environment values, clipboard text,
command output, file contents and variables.
"""

__version__ = "1.0.0"

from .buffer import SourceBuffer
from .template import Template, expand_text
from .directives import DirectiveRegistry
from .expander import Expander, SourceReadError
from .host import HostServices
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "SourceBuffer",
    "Template",
    "expand_text",
    "DirectiveRegistry",
    "Expander",
    "SourceReadError",
    "HostServices",
    "LOG",
    "WARN",
    "state_connectToLogger",
    "__version__",
]
