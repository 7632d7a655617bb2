"""Tests for the command-line entry point."""
import sys
import os
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from unittest.mock import patch, MagicMock

import requests

from dkeys.config import Config, DEFAULT_CONFIG
from dkeys.main import main

CONFIG = os.path.join(tempfile.mkdtemp(), "config.json")


def grammar_response(corrections):
    resp = MagicMock()
    resp.json.return_value = {"corrections": corrections, "count": len(corrections)}
    return resp


def test_check_lists_and_applies(capsys):
    body = [
        {"location": {"start": 2, "end": 5}, "oldText": "has", "newText": "have",
         "explanation": "agreement"},
        {"location": {"start": 8, "end": 13}, "oldText": "apple", "newText": "apples",
         "explanation": "plural"},
    ]
    with patch('requests.post', return_value=grammar_response(body)) as mock_post:
        code = main(["--config", CONFIG, "check", "I has a apple", "--apply",
                     "--url", "http://localhost:9999/grammar/fix"])
    assert code == 0
    assert mock_post.call_args[0][0] == "http://localhost:9999/grammar/fix"
    out = capsys.readouterr().out.splitlines()
    assert "'has' -> 'have'" in out[0]
    assert out[-1] == "I have a apples"


def test_check_without_issues(capsys):
    with patch('requests.post', return_value=grammar_response([])):
        code = main(["--config", CONFIG, "check", "All good."])
    assert code == 0
    assert "No grammar issues found." in capsys.readouterr().out


def test_check_offline(capsys):
    with patch('requests.post', side_effect=requests.ConnectionError("refused")):
        code = main(["--config", CONFIG, "check", "I has a"])
    assert code == 0
    assert "No grammar issues found." in capsys.readouterr().out


def test_suggest(capsys):
    code = main(["--config", CONFIG, "suggest", "I want to wri"])
    assert code == 0
    lines = capsys.readouterr().out.split()
    assert 0 < len(lines) <= 3
    assert all(line.lower().startswith("wri") for line in lines)


def test_url_flag_leaves_config_untouched():
    with patch('requests.post', return_value=grammar_response([])) as mock_post:
        main(["--config", CONFIG, "check", "Fine.", "--url", "http://override.test/fix"])
    assert mock_post.call_args[0][0] == "http://override.test/fix"
    assert not os.path.exists(CONFIG)
    assert Config(CONFIG).grammar_url == DEFAULT_CONFIG["grammar_url"]
