"""
Expansion context and scanning state machine

A Template owns everything one expansion run needs: the source buffer,
the output accumulator, the variable store, and references to the shared
directive registry and host services.

The run is a loop over ScanState values. Each state is a method that
consumes from the buffer and returns the next state:

    TEXT ──{{──> DIRECTIVE ──keyword──> HANDLER ──> TEXT / SKIP_TO_END
                     │  └──/*──> COMMENT ──}}──> TEXT
                     └──unknown──> HALT

Plain text is copied verbatim until the first "{{". Handler results are
either emitted (appended to the output, never scanned again) or inserted
into the buffer at the cursor, where the TEXT state picks them up and
expands any directives they contain.

Example:
    >>> Template("{{ let a hello }}{{ var a }}").expand()
    'hello'
"""

from typing import Callable, Dict, List, Mapping, Optional

from ..models.directives import DirectiveSpec
from ..models.scanner import ScanState, HaltReason, LEFT_DELIM, RIGHT_DELIM, COMMENT_OPEN
from .buffer import SourceBuffer
from .directives import DirectiveRegistry
from .host import HostServices
from .variables import VariableStore
from .log import LOG, WARN


class Template:
    """
    One expansion run over one source text

    Attributes:
        buffer: SourceBuffer being scanned (grows when text is inserted)
        output: Emitted chunks, in order
        variables: VariableStore for let/var
        registry: DirectiveRegistry used to resolve keywords
        host: HostServices for env/clip/exec/file
        directive: Spec of the directive whose handler runs next
        halt_reason: Why the run stopped (None until it has)
    """

    def __init__(
        self,
        text: str,
        registry: Optional[DirectiveRegistry] = None,
        host: Optional[HostServices] = None,
        variables: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.buffer = SourceBuffer(text)
        self.output: List[str] = []
        self.variables = VariableStore(variables)
        self.registry = registry if registry is not None else DirectiveRegistry()
        self.host = host if host is not None else HostServices()
        self.directive: Optional[DirectiveSpec] = None
        self.halt_reason: Optional[HaltReason] = None

        self.transitions: Dict[ScanState, Callable[[], ScanState]] = {
            ScanState.TEXT: self.text_scan,
            ScanState.DIRECTIVE: self.directive_scan,
            ScanState.HANDLER: self.handler_run,
            ScanState.COMMENT: self.comment_skip,
            ScanState.SKIP_TO_END: self.end_skip,
        }

    @property
    def line(self) -> int:
        """Newlines consumed so far"""
        return self.buffer.line

    @property
    def expanded(self) -> str:
        """Output accumulated so far"""
        return ''.join(self.output)

    def truncated(self) -> bool:
        """True if the run stopped before the end of the source"""
        return self.halt_reason not in (None, HaltReason.END_OF_INPUT)

    def puts(self, text: str) -> None:
        """Emit text to the output; it is not scanned again"""
        self.output.append(text)

    def insert(self, text: str) -> None:
        """Re-inject text at the cursor so it is scanned next"""
        LOG(f"Inserting {len(text)} characters at position {self.buffer.pos}", level=3)
        self.buffer.insert(text)

    def halt(self, reason: HaltReason, detail: str = "") -> ScanState:
        """
        Stop the run, keeping the output produced so far

        Truncations other than END_OF_INPUT are reported through WARN();
        the caller gets the partial output and can inspect halt_reason.
        """
        self.halt_reason = reason
        if reason is not HaltReason.END_OF_INPUT:
            message = f"Expansion stopped on line {self.line + 1} ({reason.value})"
            if detail:
                message += f": {detail}"
            WARN(message)
        return ScanState.HALT

    def expand(self) -> str:
        """
        Run the state machine to completion

        Returns:
            The expanded text (possibly truncated, see halt_reason)
        """
        state = ScanState.TEXT
        while state is not ScanState.HALT:
            state = self.transitions[state]()
        return self.expanded

    def text_scan(self) -> ScanState:
        """Copy text up to the next {{ to the output"""
        scanned = self.buffer.delimiter_consume(LEFT_DELIM)
        self.puts(scanned.text)
        if scanned.found:
            return ScanState.DIRECTIVE
        return self.halt(HaltReason.END_OF_INPUT)

    def directive_scan(self) -> ScanState:
        """Read the keyword after {{ and select what runs next"""
        word = self.buffer.word_read()
        if word == COMMENT_OPEN:
            return ScanState.COMMENT

        spec = self.registry.spec_get(word)
        if spec is None:
            return self.halt(HaltReason.UNKNOWN_DIRECTIVE, f"unknown directive '{word}'")

        LOG(f"Directive '{word}' on line {self.line + 1}", level=3)
        self.directive = spec
        return ScanState.HANDLER

    def handler_run(self) -> ScanState:
        """Run the handler of the selected directive"""
        spec = self.directive
        self.directive = None
        return spec.handler(self)

    def comment_skip(self) -> ScanState:
        """
        Discard a comment through the }} that closes it

        {{ and }} pairs inside the comment body are balanced, so a
        directive mentioned in a comment does not end the comment early.
        If the pairs never balance, the comment ends at its first }} and
        scanning resumes from there.
        """
        depth = 1
        first_close = None
        while depth > 0:
            closing = self.buffer.delimiter_scanTo(RIGHT_DELIM)
            if not closing.found:
                if first_close is not None:
                    LOG(f"Unbalanced {{{{ in comment, ending it at the first }}}}", level=2)
                    self.buffer.position_restore(first_close)
                break
            depth += closing.text.count(LEFT_DELIM) - 1
            self.buffer.advance(len(RIGHT_DELIM))
            if first_close is None:
                first_close = self.buffer.position_save()
        return ScanState.TEXT

    def end_skip(self) -> ScanState:
        """Discard the rest of the directive body through }}"""
        self.buffer.delimiter_consume(RIGHT_DELIM)
        return ScanState.TEXT


def expand_text(
    text: str,
    registry: Optional[DirectiveRegistry] = None,
    host: Optional[HostServices] = None,
    variables: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Expand all directives in text

    Example:
        >>> expand_text("plain text")
        'plain text'
    """
    return Template(text, registry=registry, host=host, variables=variables).expand()
