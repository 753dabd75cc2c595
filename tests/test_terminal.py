"""
Tests for the terminal front-end: key mapping and frames.
"""

import io

from pilot_installer.lib.selection import InputEvent
from pilot_installer.lib.variants import DEFAULT_VARIANT, Variant
from ui.terminal import TerminalDisplay, read_events


class TestReadEvents:
    def test_key_mapping(self):
        stream = io.StringIO("j\nk\nDOWN\nbogus\n\nq\n")
        assert list(read_events(stream)) == [
            InputEvent.DOWN,
            InputEvent.UP,
            InputEvent.DOWN,
            InputEvent.CONFIRM,
            InputEvent.CANCEL,
        ]

    def test_eof(self):
        assert list(read_events(io.StringIO(""))) == []


class TestTerminalDisplay:
    def test_progress_bar(self):
        out = io.StringIO()
        TerminalDisplay(out, clear=False).show_progress(50)
        assert "50%" in out.getvalue()
        assert "#" * 20 + "-" * 20 in out.getvalue()

    def test_progress_clamped(self):
        out = io.StringIO()
        TerminalDisplay(out, clear=False).show_progress(150)
        assert "100%" in out.getvalue()

    def test_variants_highlight(self):
        out = io.StringIO()
        variants = [DEFAULT_VARIANT, Variant("alice", "https://example.com/alice.git")]
        TerminalDisplay(out, clear=False).show_variants(variants, 1)
        assert "> alice" in out.getvalue()
        assert "  " + DEFAULT_VARIANT.name in out.getvalue()

    def test_finishing(self):
        out = io.StringIO()
        with TerminalDisplay(out, clear=False) as d:
            d.show_finishing()
        assert "Finishing install..." in out.getvalue()
