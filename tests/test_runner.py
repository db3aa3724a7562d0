# tests/test_runner.py
"""Tests for run orchestration."""

import re
from io import StringIO

import pytest
from rich.console import Console

from unscramm import runner
from unscramm.config import DEBUG_LOG_PREFIX, SpeedPreset
from unscramm.runner import RunConfig, run
from unscramm.ui import NEON_THEME

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


@pytest.fixture
def output(monkeypatch):
    """Route runner output to an in-memory console."""
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=True, width=100, theme=NEON_THEME)
    monkeypatch.setattr(runner, "console", console)
    return buffer


def _plain(buffer):
    return ANSI_RE.sub("", buffer.getvalue())


class TestRunConfig:
    """Tests for RunConfig."""

    def test_animation_config_follows_speed(self):
        config = RunConfig(speed=SpeedPreset.SNAIL, reduced_motion=True)
        animation = config.animation_config()
        assert animation.speed_multiplier == 4.0
        assert animation.reduced_motion is True


class TestRun:
    """Tests for run()."""

    @pytest.mark.asyncio
    async def test_script_only(self, output):
        config = RunConfig(source="apple", target="ape", script_only=True, banner=False)

        assert await run(config) == 0

        text = _plain(output)
        assert "Frame Script" in text
        assert "SCRIPT ONLY" in text

    @pytest.mark.asyncio
    async def test_plays_to_completion(self, output):
        config = RunConfig(source="teh", target="the", reduced_motion=True, banner=False)

        assert await run(config) == 0

        text = _plain(output)
        assert "t h e" in text
        assert "COMPLETED" in text

    @pytest.mark.asyncio
    async def test_identical_words(self, output):
        config = RunConfig(source="word", target="word", reduced_motion=True, banner=False)

        assert await run(config) == 0
        assert "nothing to animate" in _plain(output)

    @pytest.mark.asyncio
    async def test_banner(self, output):
        config = RunConfig(source="a", target="a", script_only=True)
        assert await run(config) == 0
        assert "un-scramble" in _plain(output)

    @pytest.mark.asyncio
    async def test_debug_log_written(self, output, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = RunConfig(source="teh", target="the", reduced_motion=True, banner=False, debug=True)

        assert await run(config) == 0

        logs = list(tmp_path.glob(f"{DEBUG_LOG_PREFIX}*.log"))
        assert len(logs) == 1
        content = logs[0].read_text(encoding="utf-8")
        assert "Run 1 completed" in content
        assert "Debug log saved" in _plain(output)
