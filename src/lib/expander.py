"""
Expander: one template in, one expansion appended to its destination

Reads the template source (a file or standard input), runs a Template over
it, and appends the result to the output file (created along with any
missing directories) or writes it to standard output.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, TextIO

from ..config import appsettings
from ..models.pathmatch import IOPair
from .directives import DirectiveRegistry
from .host import HostServices
from .template import Template
from .log import LOG


class SourceReadError(Exception):
    """Raised when a template's own source cannot be read"""
    pass


def source_read(pair: IOPair, stdin: Optional[TextIO] = None) -> str:
    """
    Read the template text for a matched pair

    Standard input is read to its end; on a terminal each line is prompted
    with ">> ".

    Raises:
        SourceReadError: If the template cannot be read
    """
    if pair.stdin_is():
        stream = stdin if stdin is not None else sys.stdin
        try:
            if stream.isatty():
                return stdin_readInteractive(stream)
            return stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"reading standard input: {e}") from e

    try:
        return Path(pair.input).read_bytes().decode(appsettings.encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"reading {pair.input}: {e}") from e


def stdin_readInteractive(stream: TextIO) -> str:
    """Read lines typed at a terminal until end of file"""
    lines = []
    print(">> ", end="", file=sys.stderr, flush=True)
    for line in stream:
        lines.append(line if line.endswith('\n') else line + '\n')
        print(">> ", end="", file=sys.stderr, flush=True)
    return ''.join(lines)


class Expander:
    """
    Expands one template source into its destination

    Responsibilities:
    - Run the expansion state machine over the source
    - Report truncated runs
    - Append the result to the output (creating directories as needed)
    """

    def __init__(
        self,
        source: str,
        output: str = "-",
        registry: Optional[DirectiveRegistry] = None,
        host: Optional[HostServices] = None,
        variables: Optional[Mapping[str, str]] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize expander

        Args:
            source: Template text
            output: Output file path, or "-" for standard output
            registry: Directive registry (built-in directives if None)
            host: Host services (real environment, shell, files if None)
            variables: Variables defined before the first directive runs
            stdout: Stream used for "-" (sys.stdout if None)
        """
        self.source = source
        self.output = output
        self.stdout = stdout
        self.template = Template(source, registry=registry, host=host, variables=variables)

    def expand(self) -> Dict[str, Any]:
        """
        Expand the source and write the result

        Returns:
            dict with expansion results and statistics
        """
        LOG(f"Expanding {len(self.source)} characters", level=2)
        text = self.template.expand()
        if appsettings.trailing_newline:
            text += '\n'

        written = self.output_write(text)
        LOG(f"wrote {written} bytes to {self.outputName_display()}", level=1)

        return {
            'status': not self.template.truncated(),
            'output_file': self.output,
            'bytes_written': written,
            'lines_scanned': self.template.line,
            'halt_reason': self.template.halt_reason,
        }

    def outputName_display(self) -> str:
        return "standard output" if self.output == "-" else self.output

    def output_write(self, text: str) -> int:
        """
        Append text to the output

        Returns:
            Number of bytes written
        """
        data = text.encode(appsettings.encoding)
        if self.output == "-":
            stream = self.stdout if self.stdout is not None else sys.stdout
            stream.write(text)
            stream.flush()
            return len(data)

        path = Path(self.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'ab') as f:
            f.write(data)
        return len(data)
