"""
Directive implementations for mexpand

Each handler runs with the buffer positioned just after the directive
keyword, consumes the rest of the directive body, and returns the next
ScanState. Handlers either emit text to the output, splice text back into
the buffer for rescanning, or update the variable store.
"""

from typing import Any, Callable, Dict, Optional

from ..config import appsettings
from ..models.directives import DirectiveSpec, DirectiveCategory
from ..models.scanner import ScanState, HaltReason, RIGHT_DELIM
from .log import LOG


class DirectiveRegistry:
    """
    Registry of directive specifications and handlers

    Maps directive keywords to DirectiveSpec objects. The table is filled
    once in the constructor and only read afterwards, so one registry can
    serve any number of expansion runs.
    """

    def __init__(self) -> None:
        """Initialize the directive registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.emissionDirectives_register()
        self.injectionDirectives_register()
        self.storeDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[Callable[[Any], ScanState]]:
        """
        Get directive handler by keyword

        Args:
            name: Directive keyword (exact, case-sensitive)

        Returns:
            Handler function or None if not found
        """
        spec = self.specs.get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[DirectiveSpec]:
        """Get full directive specification by keyword"""
        return self.specs.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.specs

    def directives_listByCategory(self, category: DirectiveCategory) -> list[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def emissionDirectives_register(self) -> None:
        """Register directives that write straight to the output"""

        def env_handler(template: Any) -> ScanState:
            """Handle {{ env $NAME }} - environment variable, or the token itself"""
            word = template.buffer.word_read()
            if not word:
                return ScanState.SKIP_TO_END
            if not word.startswith('$'):
                # Not a variable reference, pass the text through
                template.puts(word)
                return ScanState.SKIP_TO_END
            value = template.host.env_get(word[1:])
            if value:
                template.puts(value)
            else:
                LOG(f"Environment variable {word} is not set", level=2)
                template.puts(word)
            return ScanState.SKIP_TO_END

        def var_handler(template: Any) -> ScanState:
            """Handle {{ var name }} - stored value, or the name itself"""
            name = template.buffer.word_read()
            value = template.variables.get(name)
            if value:
                template.puts(value)
            else:
                LOG(f"Variable '{name}' is not set", level=2)
                template.puts(name)
            return ScanState.SKIP_TO_END

        def clip_handler(template: Any) -> ScanState:
            """Handle {{ clip }} - clipboard text behind a marker line"""
            text = template.host.clipboard_read()
            if text:
                template.puts(appsettings.clip_marker + text)
            else:
                template.puts(appsettings.clip_placeholder)
            return ScanState.SKIP_TO_END

        self.register(DirectiveSpec(
            name='env',
            category=DirectiveCategory.EMISSION,
            description='Value of an environment variable',
            handler=env_handler,
            examples=['{{ env $HOME }}']
        ))

        self.register(DirectiveSpec(
            name='var',
            category=DirectiveCategory.EMISSION,
            description='Value of a variable set with let',
            handler=var_handler,
            examples=['{{ var author }}']
        ))

        self.register(DirectiveSpec(
            name='clip',
            category=DirectiveCategory.EMISSION,
            description='Text contents of the system clipboard',
            handler=clip_handler,
            examples=['{{ clip }}']
        ))

    def injectionDirectives_register(self) -> None:
        """Register directives whose result is scanned again"""

        def exec_handler(template: Any) -> ScanState:
            """Handle {{ exec command }} - splice the command's stdout into the source"""
            command = template.buffer.delimiter_consume(RIGHT_DELIM).text
            if command.strip():
                output = template.host.command_run(command)
                if output is not None:
                    template.insert(output.strip('\n'))
            return ScanState.TEXT

        def file_handler(template: Any) -> ScanState:
            """Handle {{ file path }} - splice the file's contents into the source"""
            path = template.buffer.word_read()
            template.buffer.delimiter_consume(RIGHT_DELIM)
            try:
                contents = template.host.file_read(path)
            except (OSError, UnicodeDecodeError) as e:
                return template.halt(HaltReason.UNREADABLE_FILE, f"cannot read '{path}': {e}")
            template.insert(contents)
            return ScanState.TEXT

        self.register(DirectiveSpec(
            name='exec',
            category=DirectiveCategory.INJECTION,
            description='Standard output of a shell command',
            handler=exec_handler,
            examples=['{{ exec date +%Y }}', '{{ exec git rev-parse --short HEAD }}']
        ))

        self.register(DirectiveSpec(
            name='file',
            category=DirectiveCategory.INJECTION,
            description='Contents of a file',
            handler=file_handler,
            examples=['{{ file header.tpl }}']
        ))

    def storeDirectives_register(self) -> None:
        """Register directives that only update the variable store"""

        def let_handler(template: Any) -> ScanState:
            """Handle {{ let name value }} - define a variable, emit nothing"""
            name = template.buffer.word_read()
            value = template.buffer.delimiter_consume(RIGHT_DELIM).text.strip(' ')
            template.variables.store(name, value)
            LOG(f"let {name} = '{value}'", level=3)
            return ScanState.TEXT

        self.register(DirectiveSpec(
            name='let',
            category=DirectiveCategory.STORE,
            description='Define a variable for later var directives',
            handler=let_handler,
            examples=['{{ let author Jane Doe }}']
        ))
