from datetime import timedelta

import pytest

from aocapi.exceptions import ParseError
from aocapi.utils import parse_cooldown
from aocapi.utils import parse_wait_time


@pytest.mark.parametrize(
    "text, seconds",
    [
        ("Please wait one minute", 60),
        ("Please wait 5 minutes", 300),
        ("Please wait one second", 1),
        ("Please wait 2 seconds", 2),
    ],
)
def test_parse_wait_time(text, seconds):
    assert parse_wait_time(text) == timedelta(seconds=seconds)


def test_parse_wait_time_in_page():
    html = """<article><p>That's not the right answer.  If you're stuck, there are some general tips on the <a href="/2015/about">about page</a>, or you can ask for hints on the <a href="https://www.reddit.com/r/adventofcode/" target="_blank">subreddit</a>.  Please wait one minute before trying again. (You guessed <span style="white-space:nowrap;"><code>WROOOONG</code>.)</span> <a href="/2015/day/1">[Return to Day 1]</a></p></article>"""
    assert parse_wait_time(html) == timedelta(minutes=1)


def test_parse_wait_time_uses_first_phrase():
    text = "Please wait 10 minutes. Please wait one second."
    assert parse_wait_time(text) == timedelta(minutes=10)


@pytest.mark.parametrize(
    "text",
    [
        "invalid",
        "",
        "please wait one minute",
        "Please wait a minute",
        "Please wait 5 hours",
    ],
)
def test_parse_wait_time_invalid(text):
    with pytest.raises(ParseError("no wait time found in response")):
        parse_wait_time(text)


@pytest.mark.parametrize(
    "text, seconds",
    [
        ("You have 30s left to wait.", 30),
        ("You have 3m 30s left to wait.", 210),
    ],
)
def test_parse_cooldown(text, seconds):
    assert parse_cooldown(text) == timedelta(seconds=seconds)


def test_parse_cooldown_invalid():
    with pytest.raises(ParseError("no cooldown found in response")):
        parse_cooldown("You gave an answer too recently")
