from __future__ import annotations

import logging
import os
import platform
import re
import shutil
import threading
import time
import typing as t
from collections import deque
from datetime import timedelta
from functools import lru_cache
from importlib.metadata import version
from pathlib import Path
from tempfile import NamedTemporaryFile
from zoneinfo import ZoneInfo

import bs4
import urllib3

from .exceptions import ConfigError
from .exceptions import ParseError

log: logging.Logger = logging.getLogger(__name__)
AOC_TZ = ZoneInfo("America/New_York")
_v = version("aoc-api")
USER_AGENT = f"aoc-api v{_v}"

# RFC 6265 cookie-octet
_cookie_value = re.compile(r"[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]+")
_wait_pattern = re.compile(r"Please wait (one|\d+) (minute|second)s?\b")
_cooldown_pattern = re.compile(r"You have (?:(\d+)m )?(\d+)s left to wait")


class HttpClient:
    # every request to adventofcode.com goes through this wrapper
    # so that we can put in the session cookie, user agent header, rate-limit, etc.
    # the headers are fixed at construction, so one client may be shared by any
    # number of puzzles (and threads) of the same session.

    pool_manager: urllib3.PoolManager
    req_count: dict[t.Literal["GET", "POST"], int]
    _max_t: float = 3.0

    def __init__(self, token: str) -> None:
        if not isinstance(token, str) or not _cookie_value.fullmatch(token):
            raise ConfigError(f"invalid session token {token!r}")
        headers = {"User-Agent": USER_AGENT, "Cookie": f"session={token}"}
        proxy_url = os.environ.get("http_proxy") or os.environ.get("https_proxy")
        try:
            if proxy_url:
                self.pool_manager = urllib3.ProxyManager(proxy_url, headers=headers)
            else:
                self.pool_manager = urllib3.PoolManager(headers=headers)
        except urllib3.exceptions.HTTPError as err:
            raise ConfigError(f"could not create the http client: {err}") from err
        self.req_count = {"GET": 0, "POST": 0}
        self._cooloff = 0.16
        self._history = deque([time.time() - self._max_t] * 4, maxlen=4)
        self._lock = threading.Lock()

    def _limiter(self) -> None:
        with self._lock:
            now = time.time()
            t0 = self._history[0]
            if now - t0 < self._max_t:
                # made 4 requests within 3 seconds - you're past the speed limit
                # of 1 req/second and will get a delay of 160ms initially, then
                # increasing exponentially on subsequent occasions.
                msg = "you're being rate-limited - slow down on the requests! (delay=%.02fs)"
                log.warning(msg, self._cooloff)
                time.sleep(self._cooloff)
                self._cooloff *= 2  # double it for repeat offenders
                self._cooloff = min(self._cooloff, 10)
            self._history.append(now)

    def get(self, url: str) -> urllib3.BaseHTTPResponse:
        # getting user inputs
        self._limiter()
        resp = self.pool_manager.request("GET", url)
        with self._lock:
            self.req_count["GET"] += 1
        return resp

    def post(self, url: str, fields: t.Mapping[str, str]) -> urllib3.BaseHTTPResponse:
        # submitting answers
        self._limiter()
        resp = self.pool_manager.request_encode_body(
            method="POST",
            url=url,
            fields=fields,
            encode_multipart=False,
        )
        with self._lock:
            self.req_count["POST"] += 1
        return resp


def _ensure_intermediate_dirs(path):
    path.expanduser().parent.mkdir(parents=True, exist_ok=True)


def atomic_write_file(path: Path, contents_str: str) -> None:
    """
    Atomically write a string to a file by writing it to a temporary file, and then
    renaming it to the final destination name. A failed write never clobbers the
    previous contents of `path`. Newlines are written untranslated.
    """
    _ensure_intermediate_dirs(path)
    with NamedTemporaryFile(
        "w", dir=path.parent, encoding="utf-8", newline="", delete=False
    ) as f:
        log.debug("writing to tempfile @ %s", f.name)
        try:
            f.write(contents_str)
        except BaseException:
            f.close()
            os.unlink(f.name)
            raise
    log.debug("moving %s -> %s", f.name, path)
    try:
        shutil.move(f.name, path)
    except BaseException:
        os.unlink(f.name)
        raise


def parse_wait_time(text: str) -> timedelta:
    """
    Find the first "Please wait <quantity> <unit>" phrase in the text and return the
    wait time it describes. Quantity is "one" or an integer literal, unit is minute(s)
    or second(s). Raises `ParseError` if there is no such phrase.
    """
    match = _wait_pattern.search(text)
    if match is None:
        raise ParseError("no wait time found in response")
    quantity, unit = match.groups()
    n = 1 if quantity == "one" else int(quantity)
    if unit == "minute":
        n *= 60
    return timedelta(seconds=n)


def parse_cooldown(text: str) -> timedelta:
    """Parse the "You have 3m 30s left to wait" phrase from an answer given too soon"""
    try:
        [(minutes, seconds)] = _cooldown_pattern.findall(text)
    except ValueError:
        raise ParseError("no cooldown found in response")
    wait_time = int(seconds)
    if minutes:
        wait_time += 60 * int(minutes)
    return timedelta(seconds=wait_time)


def _sanitized(token: str) -> str:
    return "..." + token[-4:]


_ANSIColor = t.Literal[
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"
]
_ansi_colors = t.get_args(_ANSIColor)
if platform.system() == "Windows":
    os.system("color")  # hack - makes ANSI colors work in the windows cmd window


def colored(txt: str, color: _ANSIColor | None) -> str:
    if color is None:
        return txt
    code = _ansi_colors.index(color.casefold())
    reset = "\x1b[0m"
    return f"\x1b[{code + 30}m{txt}{reset}"


@lru_cache(maxsize=16)
def _get_soup(html):
    return bs4.BeautifulSoup(html, "html.parser")
