#!/usr/bin/env python3
"""
mexpand - Template macro expander

Expands {{ ... }} directives in text templates.

Directives:
    {{ env $NAME }}         environment variable (or "$NAME" if unset)
    {{ var name }}          variable set with let (or "name" if unset)
    {{ let name value }}    define a variable, produces no text
    {{ exec command }}      shell command output, expanded again
    {{ file path }}         file contents, expanded again
    {{ clip }}              clipboard text
    {{ /* comment }}        discarded

Usage:
    mexpand [templates ...] [-o outputs ...]
    mexpand --directives

    With no templates, standard input is read. With no outputs, expansions
    go to standard output. Output files are appended to, never truncated.

Examples:
    # Expand to standard output
    mexpand notes.tpl

    # One output per template
    mexpand a.tpl b.tpl -o a.md b.md

    # Derive output names: build/<name>.md
    mexpand a.tpl b.tpl -o "/de build md"

Security:
    exec runs arbitrary shell commands and file reads arbitrary paths.
    Only expand templates you trust. A command that never exits blocks
    the expansion indefinitely.
"""

import sys
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import Expander, DirectiveRegistry, SourceReadError, __version__, LOG, state_connectToLogger
from .lib.expander import source_read
from .lib.lexer import source_highlight
from .lib.pathmatch import outputs_match
from .lib.variables import variables_loadYAML, VariablesError
from .models import ProgramState, DirectiveCategory, pipeline
from .models.pathmatch import STDIN_NAME, STDOUT_NAME


EXIT_READ_ERROR = 1
EXIT_TRUNCATED = 2

# Define CLI arguments
parser = ArgumentParser(
    prog="mexpand",
    description="mexpand - expand {{ ... }} directives in text templates",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "templates", nargs="*", type=str, help="Template files to expand (standard input if none)"
)

parser.add_argument(
    "-o",
    "--outputs",
    nargs="*",
    default=[],
    type=str,
    help="Output files or wildcard specs such as '/e txt' (standard output if none)",
)

parser.add_argument(
    "--varsFile",
    default=None,
    type=str,
    help="YAML file of variables defined before each template is expanded",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    help="Print each template with syntax highlighting to stderr before expanding it",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument(
    "--directives",
    action="store_true",
    help="List the available directives and exit",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def directives_describe(registry: DirectiveRegistry) -> str:
    """Directive table grouped by category, with examples"""
    lines = []
    for category in DirectiveCategory:
        lines.append(f"{category.value}:")
        for spec in sorted(registry.directives_listByCategory(category), key=lambda s: s.name):
            note = " (expanded again)" if spec.rescans() else ""
            lines.append(f"  {spec.name:<6} {spec.description}{note}")
            for example in spec.examples:
                lines.append(f"         {example}")
    return '\n'.join(lines)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Match templates with outputs and load seed variables.

    Returns:
        ProgramState with added fields:
            - ioPairs: Templates matched with outputs
            - seedVariables: Variables from varsFile
            - envOK: True if the environment is valid

    Exits:
        1 if the variables file cannot be loaded
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    templates = state.templates or [STDIN_NAME]
    outputs = state.outputs or [STDOUT_NAME]
    state.ioPairs = outputs_match(templates, outputs, appsettings.default_extension)
    for pair in state.ioPairs:
        LOG(f"{pair.input} -> {pair.output}", level=2)

    if state.varsFile:
        try:
            state.seedVariables = variables_loadYAML(state.varsFile)
        except VariablesError as e:
            print(f"Error: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(EXIT_READ_ERROR)
        LOG(f"Loaded {len(state.seedVariables)} variables from {state.varsFile}", level=2)

    state.envOK = True
    return state


def templates_expand(inputstate: ProgramState) -> ProgramState:
    """
    Expand every matched template into its output.

    A template that cannot be read is reported and skipped; the others
    are still expanded.

    Returns:
        ProgramState with added fields:
            - expandResults: One result dict per expanded template
            - exitCode: 1 if any template could not be read
    """
    state = inputstate.copy()
    state.expandResults = []

    for pair in state.ioPairs:
        try:
            source = source_read(pair)
        except SourceReadError as e:
            print(f"Error {e}", file=sys.stderr)
            state.exitCode = EXIT_READ_ERROR
            continue

        if not pair.stdin_is():
            LOG(f"Executing {pair.input}", level=1)
        if state.highlight:
            print(source_highlight(source), file=sys.stderr)

        output = pair.output
        try:
            result = Expander(source, output=output, variables=state.seedVariables).expand()
        except OSError as e:
            print(f"Error writing {output}: {e}", file=sys.stderr)
            state.exitCode = EXIT_READ_ERROR
            continue
        result['input_file'] = pair.input
        state.expandResults.append(result)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run and settle the exit status.

    Truncated expansions were already reported as warnings; in strict
    mode they also make the run fail.
    """
    state: ProgramState = inputstate.copy()

    truncated = [r for r in state.expandResults if not r['status']]
    LOG(f"Expanded {len(state.expandResults)} template(s), {len(truncated)} truncated", level=2)

    if truncated and appsettings.strict_mode and state.exitCode == 0:
        state.exitCode = EXIT_TRUNCATED
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - expand templates named on the command line.

    Orchestrates the pipeline:
        1. env_check: Match templates with outputs, load variables
        2. templates_expand: Expand each template into its output
        3. results_report: Summarize and pick the exit status

    Returns:
        Process exit status
    """
    options: Namespace = parser.parse_args(argv)
    if options.directives:
        print(directives_describe(DirectiveRegistry()))
        return 0

    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    final_state = pipeline(state, env_check, templates_expand, results_report)
    return final_state.exitCode


if __name__ == "__main__":
    sys.exit(main())
