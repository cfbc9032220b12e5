"""Tests for the command-line harness."""

import os
from unittest.mock import patch

from holefiller.cli import main
from holefiller.completion_client import TextChunk


class OneShotBackend:
    def __init__(self, response):
        self.response = response

    async def stream(self, system_prompt, messages, request):
        yield TextChunk(self.response)


@patch.dict(os.environ, {"HOLEFILLER_LLM_PROVIDER": "anthropic"})
class TestCli:
    def test_prints_completion(self, tmp_path, capsys):
        path = tmp_path / "sample.py"
        path.write_text("def add(a, b):\n    return ")
        backend = OneShotBackend("<COMPLETION>a + b</COMPLETION>")

        with patch("holefiller.provider.build_backend", return_value=backend):
            code = main([str(path), "--line", "1", "--character", "11"])

        assert code == 0
        assert capsys.readouterr().out == "a + b\n"

    def test_no_suggestion_exit_code(self, tmp_path, capsys):
        path = tmp_path / "empty.py"
        path.write_text("")

        with patch("holefiller.provider.build_backend", return_value=OneShotBackend("")):
            code = main([str(path), "--line", "0", "--character", "0"])

        assert code == 1
        assert capsys.readouterr().out == ""

    def test_unknown_provider(self, tmp_path):
        path = tmp_path / "sample.py"
        path.write_text("x = ")
        code = main([str(path), "--line", "0", "--character", "4", "--provider", "nope"])
        assert code == 2
