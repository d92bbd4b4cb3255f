"""
Source buffer tests

Tests cursor movement, backup, insertion and delimiter/word scanning.
"""

import pytest

from mexpand.lib.buffer import SourceBuffer
from mexpand.models.scanner import EOF, END_OF_INPUT


class TestCursor:
    """Test next/peek/backup"""

    def test_next_walks_text(self):
        """next() returns characters in order, then EOF"""
        buf = SourceBuffer("ab")
        assert buf.next() == "a"
        assert buf.next() == "b"
        assert buf.next() == EOF
        assert buf.width == 0
        assert buf.pos == 2

    def test_empty_buffer(self):
        """Empty buffer is immediately exhausted"""
        buf = SourceBuffer("")
        assert buf.exhausted()
        assert buf.next() == EOF
        assert buf.peek() == EOF

    def test_peek_does_not_advance(self):
        """peek() leaves position and width alone"""
        buf = SourceBuffer("xy")
        buf.next()
        assert buf.peek() == "y"
        assert buf.pos == 1
        assert buf.width == 1

    def test_backup_restores_position(self):
        """backup() un-consumes the last character"""
        buf = SourceBuffer("xy")
        buf.next()
        buf.next()
        buf.backup()
        assert buf.pos == 1
        assert buf.next() == "y"

    def test_backup_after_eof_is_noop(self):
        """backup() after EOF does not move the cursor"""
        buf = SourceBuffer("x")
        buf.next()
        buf.next()
        buf.backup()
        assert buf.pos == 1

    def test_newlines_counted(self):
        """Consumed newlines are counted, backup un-counts them"""
        buf = SourceBuffer("a\nb")
        buf.next()
        buf.next()
        assert buf.line == 1
        buf.backup()
        assert buf.line == 0
        assert buf.next() == "\n"
        assert buf.line == 1

    def test_non_ascii_characters(self):
        """Multi-byte characters are consumed whole"""
        buf = SourceBuffer("ü€")
        assert buf.next() == "ü"
        assert buf.next() == "€"
        assert buf.next() == EOF


class TestWhitespace:
    """Test whitespace skipping"""

    def test_skip_stops_on_text(self):
        """Cursor ends on the first non-whitespace character"""
        buf = SourceBuffer(" \t\n x")
        buf.whitespace_skip()
        assert buf.peek() == "x"
        assert buf.line == 1

    def test_skip_to_end(self):
        """Whitespace-only text is consumed entirely"""
        buf = SourceBuffer("   ")
        buf.whitespace_skip()
        assert buf.exhausted()


class TestInsert:
    """Test splicing text at the cursor"""

    def test_insert_does_not_move_cursor(self):
        """Inserted text is the next thing read"""
        buf = SourceBuffer("ab")
        buf.next()
        buf.insert("XY")
        assert buf.text == "aXYb"
        assert buf.pos == 1
        assert buf.next() == "X"

    def test_insert_at_end(self):
        """Inserting at the end extends the buffer"""
        buf = SourceBuffer("a")
        buf.next()
        buf.insert("b")
        assert not buf.exhausted()
        assert buf.next() == "b"


class TestDelimiters:
    """Test delimiter_scanTo and delimiter_consume"""

    def test_scan_to_found(self):
        """Text before the delimiter is consumed, the delimiter is not"""
        buf = SourceBuffer("abc}}def")
        scanned = buf.delimiter_scanTo("}}")
        assert scanned.text == "abc"
        assert scanned.position == 3
        assert scanned.found
        assert buf.remaining() == "}}def"

    def test_scan_to_missing(self):
        """Without a delimiter all remaining text is consumed"""
        buf = SourceBuffer("abc")
        scanned = buf.delimiter_scanTo("}}")
        assert scanned.text == "abc"
        assert scanned.position == END_OF_INPUT
        assert not scanned.found
        assert buf.exhausted()

    def test_scan_to_immediate(self):
        """Delimiter at the cursor gives empty text"""
        buf = SourceBuffer("{{x")
        scanned = buf.delimiter_scanTo("{{")
        assert scanned.text == ""
        assert scanned.position == 0

    def test_consume_steps_over_delimiter(self):
        """delimiter_consume also consumes the delimiter"""
        buf = SourceBuffer("abc}}def")
        scanned = buf.delimiter_consume("}}")
        assert scanned.text == "abc"
        assert scanned.position == 5
        assert buf.remaining() == "def"

    def test_consume_missing(self):
        """delimiter_consume reports END_OF_INPUT when nothing matches"""
        buf = SourceBuffer("abc")
        scanned = buf.delimiter_consume("}}")
        assert scanned.position == END_OF_INPUT
        assert buf.exhausted()

    def test_scan_counts_lines(self):
        """Newlines in scanned text are counted"""
        buf = SourceBuffer("a\nb\nc")
        buf.delimiter_scanTo("{{")
        assert buf.line == 2


class TestWords:
    """Test word_read tokenization"""

    def test_words_before_closing_delimiter(self):
        """A word stops before }} and leaves it in the buffer"""
        buf = SourceBuffer("  env $HOME}}")
        assert buf.word_read() == "env"
        assert buf.word_read() == "$HOME"
        assert buf.remaining() == "}}"

    def test_comment_opener(self):
        """/* ends a word and is kept in it"""
        buf = SourceBuffer(" /*note }}")
        assert buf.word_read() == "/*"
        assert buf.remaining() == "note }}"

    def test_single_brace_is_part_of_word(self):
        """A lone } does not end a word"""
        buf = SourceBuffer("a}b c")
        assert buf.word_read() == "a}b"

    def test_slash_without_star(self):
        """A / not followed by * is an ordinary character"""
        buf = SourceBuffer("dir/file.txt }}")
        assert buf.word_read() == "dir/file.txt"

    @pytest.mark.parametrize("text", ["", "   ", "}}"])
    def test_empty_word(self, text):
        """No word before EOF or }}"""
        buf = SourceBuffer(text)
        assert buf.word_read() == ""

    def test_word_at_eof(self):
        """EOF ends the word"""
        buf = SourceBuffer("word")
        assert buf.word_read() == "word"
        assert buf.exhausted()
