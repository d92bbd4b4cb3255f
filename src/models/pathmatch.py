"""
Output matching models
"""

from dataclasses import dataclass


STDIN_NAME = "-"
STDOUT_NAME = "-"


@dataclass
class IOPair:
    """
    One template matched with the destination of its expansion

    Attributes:
        input: Template path, or "-" for standard input
        output: Output path, or "-" for standard output

    Example:
        outputs_match(["a.tpl", "b.tpl"], ["out.txt"]) yields
        [IOPair("a.tpl", "out.txt"), IOPair("b.tpl", "out.txt")]
    """
    input: str
    output: str

    def stdin_is(self) -> bool:
        return self.input == STDIN_NAME

    def stdout_is(self) -> bool:
        return self.output == STDOUT_NAME
