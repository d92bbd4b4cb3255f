"""
Source buffer for the expansion scanner

Holds the mutable template text and a cursor into it. Text produced by
{{ exec }} and {{ file }} is spliced in at the cursor with insert(), so the
scanner reads it next and expands any directives it contains. There is no
recursion limit: content that reproduces its own directive never ends.

Example:
    >>> buf = SourceBuffer("ab")
    >>> buf.next()
    'a'
    >>> buf.insert("XY")
    >>> buf.next()
    'X'
"""

from typing import Tuple

from ..models.scanner import DelimitedText, EOF, END_OF_INPUT, COMMENT_OPEN


class SourceBuffer:
    """
    Mutable source text with a single-step backup cursor

    Attributes:
        text: Current source text, including anything inserted so far
        pos: Index of the next character to consume
        width: Width of the last consumed character (0 after hitting EOF);
               backup() steps back by this much
        line: Number of newlines consumed so far
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.width = 0
        self.line = 0

    def __len__(self) -> int:
        return len(self.text)

    def remaining(self) -> str:
        """Text not yet consumed"""
        return self.text[self.pos:]

    def exhausted(self) -> bool:
        return self.pos >= len(self.text)

    def next(self) -> str:
        """
        Consume and return the next character

        Returns:
            The character, or EOF once the buffer is exhausted (width is
            then set to 0 so a following backup() is a no-op)
        """
        if self.pos >= len(self.text):
            self.width = 0
            return EOF
        char = self.text[self.pos]
        self.width = 1
        self.pos += self.width
        if char == '\n':
            self.line += 1
        return char

    def peek(self) -> str:
        """Return the next character without consuming it"""
        if self.pos >= len(self.text):
            return EOF
        return self.text[self.pos]

    def backup(self) -> None:
        """
        Un-consume the last character returned by next()

        Only one level of backup is supported.
        """
        self.pos -= self.width
        if self.width == 1 and self.text[self.pos] == '\n':
            self.line -= 1

    def whitespace_skip(self) -> None:
        """Consume whitespace, leaving the cursor on the next other character"""
        while True:
            char = self.next()
            if not char.isspace():
                self.backup()
                break

    def insert(self, s: str) -> None:
        """
        Splice s into the text at the cursor

        The cursor does not move, so the next call to next() returns the
        first character of s.
        """
        self.text = self.text[:self.pos] + s + self.text[self.pos:]

    def position_save(self) -> Tuple[int, int]:
        """Cursor and line counter, for a later position_restore()"""
        return self.pos, self.line

    def position_restore(self, mark: Tuple[int, int]) -> None:
        """Return the cursor to a saved mark; no backup() is possible afterwards"""
        self.pos, self.line = mark
        self.width = 0

    def advance(self, count: int) -> str:
        """
        Consume count characters at once (clamped to the end of the text)

        Returns:
            The consumed characters
        """
        end = min(self.pos + count, len(self.text))
        chunk = self.text[self.pos:end]
        if chunk:
            self.line += chunk.count('\n')
            self.width = 1
            self.pos = end
        return chunk

    def delimiter_scanTo(self, delim: str) -> DelimitedText:
        """
        Consume everything before the next occurrence of delim

        The delimiter itself is never consumed.

        Args:
            delim: Delimiter to search for (e.g., "{{" or "}}")

        Returns:
            DelimitedText with the consumed text and the new position, or
            with all remaining text and END_OF_INPUT if delim is absent

        Example:
            For text "abc}}def" at position 0, delimiter_scanTo("}}"):
            DelimitedText(text="abc", position=3)
        """
        index = self.text.find(delim, self.pos)
        if index == -1:
            return DelimitedText(text=self.advance(len(self.text) - self.pos), position=END_OF_INPUT)
        text = self.advance(index - self.pos)
        return DelimitedText(text=text, position=self.pos)

    def delimiter_consume(self, delim: str) -> DelimitedText:
        """
        Like delimiter_scanTo(), then also step over the delimiter

        Returns:
            DelimitedText with the text before the delimiter and the
            position after it (END_OF_INPUT if it was never found)
        """
        scanned = self.delimiter_scanTo(delim)
        if not scanned.found:
            return scanned
        self.advance(len(delim))
        return DelimitedText(text=scanned.text, position=self.pos)

    def word_read(self) -> str:
        """
        Read one whitespace-delimited word after skipping leading whitespace

        A word also ends before a closing "}}" (which is left unconsumed),
        and right after a "/*" comment opener (which is kept in the word).

        Example:
            For text "  env $HOME}}", word_read() returns "env", then
            "$HOME", leaving "}}" in the buffer.
        """
        self.whitespace_skip()
        chars = []
        while True:
            char = self.next()
            if char == EOF:
                break
            if char.isspace():
                self.backup()
                break
            if char == COMMENT_OPEN[0] and self.peek() == COMMENT_OPEN[1]:
                chars.append(char)
                chars.append(self.next())
                break
            if char == '}' and self.peek() == '}':
                self.backup()
                break
            chars.append(char)
        return ''.join(chars)
