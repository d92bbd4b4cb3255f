"""
Custom Pygments lexer for mexpand template syntax

Used by the CLI --highlight option to show a template before it is
expanded.

Token types:
- Comment.Preproc: Delimiters {{ and }}
- Keyword: Directive keywords (env, exec, file, let, var, clip)
- Name.Variable: $NAME arguments of env, and let/var names
- String: Command text, file paths and let values
- Comment: {{ /* ... }} comments
- Error: Unknown directive keywords (expansion stops there)
"""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Comment,
    Keyword,
    Name,
    String,
    Error,
    Whitespace,
)


class TemplateLexer(RegexLexer):
    """
    Lexer for mexpand templates

    Example:
        Hello {{ env $USER }}

    Tokens:
        Hello  → Text
        {{     → Comment.Preproc
        env    → Keyword
        $USER  → Name.Variable
        }}     → Comment.Preproc
    """

    name = 'mexpand'
    aliases = ['mexpand', 'mex']
    filenames = ['*.tpl']

    tokens = {
        'root': [
            # Comment directive runs to the closing delimiter
            (r'(\{\{)(\s*)(/\*)', bygroups(Comment.Preproc, Whitespace, Comment), 'comment'),

            (r'(\{\{)(\s*)(env)\b', bygroups(Comment.Preproc, Whitespace, Keyword), 'word'),
            (r'(\{\{)(\s*)(var|let)\b', bygroups(Comment.Preproc, Whitespace, Keyword), 'named'),
            (r'(\{\{)(\s*)(exec|file)\b', bygroups(Comment.Preproc, Whitespace, Keyword), 'body'),
            (r'(\{\{)(\s*)(clip)\b', bygroups(Comment.Preproc, Whitespace, Keyword), 'body'),

            # Anything else after {{ stops the expansion
            (r'(\{\{)(\s*)(\S*?)(?=\s|\}\}|$)', bygroups(Comment.Preproc, Whitespace, Error), 'body'),

            (r'[^{]+', Text),
            (r'\{', Text),
        ],

        'comment': [
            (r'\}\}', Comment.Preproc, '#pop'),
            (r'[^}]+', Comment),
            (r'\}', Comment),
        ],

        'word': [
            (r'\s+', Whitespace),
            (r'\$[^\s}]+', Name.Variable),
            (r'\}\}', Comment.Preproc, '#pop'),
            (r'[^\s}]+', String),
            (r'\}', String),
        ],

        'named': [
            (r'\s+', Whitespace),
            (r'[^\s}]+', Name.Variable, ('#pop', 'body')),
            (r'\}\}', Comment.Preproc, '#pop'),
        ],

        'body': [
            (r'\}\}', Comment.Preproc, '#pop'),
            (r'[^}]+', String),
            (r'\}', String),
        ],
    }


def get_lexer() -> TemplateLexer:
    """
    Get the TemplateLexer instance

    Returns:
        TemplateLexer instance ready for use with Pygments
    """
    return TemplateLexer()


def source_highlight(source: str) -> str:
    """Render template source with ANSI colours for a terminal"""
    return highlight(source, get_lexer(), TerminalFormatter())
