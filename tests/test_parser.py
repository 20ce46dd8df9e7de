"""Tests for building pipeline descriptors."""

import pytest

from pipeshell.errors import LaunchError, ParseError
from pipeshell.parser import PipelineDescriptor, build, parse_command
from pipeshell.tokenizer import CONTROL_TOKENS


class TestBuild:
    """Verify descriptor construction from tokens."""

    def test_simple_command(self):
        """A plain command has one stage and no redirect."""
        desc = build(["ls", "-la"])
        assert desc == PipelineDescriptor(stage1=["ls", "-la"])
        assert not desc.piped
        assert desc.command == "ls"

    def test_redirect(self):
        """The word after '>' becomes the redirect target."""
        desc = build(["echo", "hi", ">", "out.txt"])
        assert desc.stage1 == ["echo", "hi"]
        assert desc.redirect_target == "out.txt"

    def test_redirect_before_args(self):
        """'>' may appear anywhere in the stage."""
        desc = build([">", "out.txt", "echo", "hi"])
        assert desc.stage1 == ["echo", "hi"]
        assert desc.redirect_target == "out.txt"

    def test_last_redirect_wins(self):
        """Repeated '>' keeps the last target."""
        desc = build(["ls", ">", "a", ">", "b"])
        assert desc.redirect_target == "b"

    def test_pipe(self):
        """'|' splits the line into two stages."""
        desc = build(["cat", "|", "wc"])
        assert desc.stage1 == ["cat"]
        assert desc.stage2 == ["wc"]
        assert desc.piped
        assert desc.final_stage == ["wc"]

    def test_redirect_binds_to_final_stage(self):
        """A '>' before the pipe still redirects the pipeline's output."""
        desc = build(["ls", ">", "out", "|", "wc", "-l"])
        assert desc.stage1 == ["ls"]
        assert desc.stage2 == ["wc", "-l"]
        assert desc.redirect_target == "out"

    def test_background_flag_carried(self):
        """The background flag is copied into the descriptor."""
        assert build(["sleep", "1"], background=True).background

    def test_empty_line(self):
        """No tokens means nothing to run."""
        assert build([]) is None

    def test_empty_background(self):
        """Backgrounding nothing is its own error."""
        with pytest.raises(LaunchError, match="cannot background an empty command"):
            build([], background=True)


class TestBuildErrors:
    """Verify malformed control token usage."""

    @pytest.mark.parametrize("tokens", [
        ["|", "cat"],
        ["cat", "|", "|", "wc"],
        ["a", "|", "b", "|", "c"],
    ])
    def test_misplaced_pipe(self, tokens):
        """Leading or repeated pipes are rejected."""
        with pytest.raises(ParseError, match="misplaced pipe"):
            build(tokens)

    def test_trailing_pipe(self):
        """A pipe with nothing after it is rejected."""
        with pytest.raises(ParseError, match="after pipe"):
            build(["cat", "|"])

    def test_missing_redirect_target(self):
        """'>' at the end of the line has no target."""
        with pytest.raises(ParseError, match="missing redirect target"):
            build(["echo", "hi", ">"])

    def test_redirect_into_control_token(self):
        """A control token cannot be a redirect target."""
        with pytest.raises(ParseError, match="missing redirect target"):
            build(["ls", ">", "|", "wc"])

    def test_redirect_without_command(self):
        """A redirect alone is not a command."""
        with pytest.raises(ParseError, match="missing command"):
            build([">", "out"])


class TestWords:
    """Verify the descriptor preserves the command words."""

    @pytest.mark.parametrize("tokens", [
        ["ls", "-la"],
        ["echo", "a", "b", ">", "f"],
        ["cat", "x", "|", "grep", "y", ">", "z"],
        [">", "f", "pwd"],
    ])
    def test_words_round_trip(self, tokens):
        """words() reproduces the non-control tokens in order."""
        expected = []
        skip = False
        for tok in tokens:
            if skip:
                skip = False
            elif tok == ">":
                skip = True
            elif tok not in CONTROL_TOKENS:
                expected.append(tok)
        assert build(tokens).words() == expected


class TestParseCommand:
    """Verify the line level entry point."""

    def test_text_is_stripped_line(self):
        """The descriptor remembers the typed text for job listings."""
        desc = parse_command("  sleep 5 &  ")
        assert desc.text == "sleep 5 &"
        assert desc.stage1 == ["sleep", "5"]
        assert desc.background

    def test_blank_line(self):
        """A blank line parses to nothing."""
        assert parse_command("   ") is None
