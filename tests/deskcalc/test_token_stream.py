"""Tests for the token stream and its source ownership."""

import io

import pytest

from deskcalc import DeskCalcLexError, DeskCalcTokenStream, DeskCalcTokenType


class TestTokenStream:
    """Test current-token tracking and source ownership."""

    def test_current_starts_as_end(self, make_stream):
        """Test the current token is END before anything is read."""
        stream = make_stream("1;")
        assert stream.current.type == DeskCalcTokenType.END

    def test_get_advances_current(self, make_stream):
        """Test get() returns the new token and makes it current."""
        stream = make_stream("1 + x;")
        token = stream.get()
        assert token.type == DeskCalcTokenType.NUMBER
        assert stream.current is token

        assert stream.get().type == DeskCalcTokenType.PLUS
        assert stream.current.type == DeskCalcTokenType.PLUS

    def test_current_is_repeatable(self, make_stream):
        """Test reading the current token again without get() returns the same token."""
        stream = make_stream("abc;")
        stream.get()
        first = stream.current
        second = stream.current
        assert first is second
        assert first.value == "abc"

    def test_failed_read_keeps_current(self, make_stream):
        """Test a lexical error leaves the previous token current."""
        stream = make_stream("7 @")
        stream.get()
        with pytest.raises(DeskCalcLexError):
            stream.get()

        assert stream.current.type == DeskCalcTokenType.NUMBER
        assert stream.current.value == 7.0

    def test_owning_stream_closes_source(self):
        """Test an owning stream closes its source when closed."""
        source = io.StringIO("1;")
        stream = DeskCalcTokenStream.owning(source)
        assert stream.owns_source
        stream.close()
        assert source.closed
        assert stream.closed

    def test_borrowing_stream_leaves_source_open(self):
        """Test a borrowing stream never closes its source."""
        source = io.StringIO("1;")
        stream = DeskCalcTokenStream.borrowing(source)
        assert not stream.owns_source
        stream.close()
        assert not source.closed
        assert stream.closed

    def test_context_manager_closes_on_error(self):
        """Test an owned source is released when a with block exits with an error."""
        source = io.StringIO("1 @;")
        with pytest.raises(DeskCalcLexError):
            with DeskCalcTokenStream.owning(source) as stream:
                stream.get()
                stream.get()

        assert source.closed

    def test_close_is_idempotent(self):
        """Test closing a stream twice is harmless."""
        source = io.StringIO("1;")
        stream = DeskCalcTokenStream.owning(source)
        stream.close()
        stream.close()
        assert source.closed

    def test_closed_stream_reads_end(self, make_stream):
        """Test reading a closed stream produces END."""
        stream = make_stream("1;")
        stream.close()
        assert stream.get().type == DeskCalcTokenType.END

    def test_set_input_releases_owned_source(self):
        """Test switching input closes an owned source and reads from the new one."""
        first = io.StringIO("1;")
        second = io.StringIO("name;")
        stream = DeskCalcTokenStream.owning(first)
        stream.set_input_borrowing(second)
        assert first.closed
        assert not stream.owns_source
        assert stream.get().value == "name"

        stream.close()
        assert not second.closed

    def test_set_input_keeps_borrowed_source_open(self):
        """Test switching input leaves a borrowed source open."""
        first = io.StringIO("1;")
        second = io.StringIO("2;")
        stream = DeskCalcTokenStream.borrowing(first)
        stream.set_input_owning(second)
        assert not first.closed
        assert stream.owns_source
        assert stream.get().value == 2.0

        stream.close()
        assert second.closed

    def test_ownership_must_be_named(self):
        """Test ownership cannot be passed as an anonymous positional flag."""
        source = io.StringIO("1;")
        with pytest.raises(TypeError):
            DeskCalcTokenStream(source, True)  # type: ignore[misc]

        stream = DeskCalcTokenStream.borrowing(source)
        with pytest.raises(TypeError):
            stream.set_input(io.StringIO("2;"), True)  # type: ignore[misc]

        assert not stream.owns_source
        stream.set_input(io.StringIO("2;"), owns=True)
        assert stream.owns_source
        assert not source.closed
