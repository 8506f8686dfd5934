import logging
import os
import sys
from datetime import timedelta
from pathlib import Path
from textwrap import dedent

import urllib3

from .exceptions import AocApiError
from .exceptions import ConfigError
from .exceptions import DiskError
from .exceptions import FetchError
from .exceptions import InputNotFetchedError
from .exceptions import ParseError
from .exceptions import PuzzleLockedError
from .exceptions import SubmitError
from .types import Accepted
from .types import AnswerResponse
from .types import PuzzleInput
from .types import Rejected
from .utils import _get_soup
from .utils import _sanitized
from .utils import atomic_write_file
from .utils import colored
from .utils import HttpClient
from .utils import parse_cooldown
from .utils import parse_wait_time


log = logging.getLogger(__name__)


AOC_API_DIR = Path(os.environ.get("AOC_API_DIR", Path("~", ".config", "aocapi")))
AOC_API_DIR = AOC_API_DIR.expanduser()
AOC_API_CACHE_DIR = Path(os.environ.get("AOC_API_CACHE_DIR", "input")).expanduser()
AOC_API_CACHE_DIR = AOC_API_CACHE_DIR.absolute()
URL = "https://adventofcode.com/{year}/day/{day}"


class Session:
    """
    An authenticated handle on adventofcode.com for one user. The session token and
    the http client built from it are fixed for the lifetime of the session, and are
    shared by every puzzle created with `Session.puzzle`.
    """

    def __init__(self, token, cache_dir=None):
        self._http = HttpClient(token)
        self._token = token
        if cache_dir is None:
            cache_dir = AOC_API_CACHE_DIR
        self._cache_dir = Path(cache_dir)

    @classmethod
    def with_cookie(cls, token, cache_dir=None):
        """
        Create a session from the value of the "session" cookie of a logged-in user.
        Raises `ConfigError` if no http client can be made with that token.
        """
        return cls(token, cache_dir=cache_dir)

    @property
    def token(self):
        return self._token

    @property
    def http(self):
        return self._http

    @property
    def cache_dir(self):
        return self._cache_dir

    def __repr__(self):
        return f"<{type(self).__name__} (token={_sanitized(self.token)})>"

    def puzzle(self, year, day):
        """Puzzle client for the given year and day, bound to this session."""
        return Puzzle(year, day, http=self.http, cache_dir=self.cache_dir)


def default_session(cache_dir=None):
    """
    Discover user's token from the environment or file, and exit with a diagnostic
    message if none can be found. This default session is used whenever a token was
    otherwise unspecified.
    """
    # export your session id as AOC_SESSION env var
    cookie = os.getenv("AOC_SESSION")
    if cookie:
        return Session.with_cookie(cookie, cache_dir=cache_dir)

    # or chuck it in a plaintext file at ~/.config/aocapi/token
    try:
        cookie = (AOC_API_DIR / "token").read_text(encoding="utf-8").split()[0]
    except (FileNotFoundError, IndexError):
        pass
    if cookie:
        return Session.with_cookie(cookie, cache_dir=cache_dir)

    msg = dedent(
        f"""\
        ERROR: AoC session ID is needed to get your puzzle data!
        You can find it in your browser cookies after login.
            1) Save the cookie into a text file {AOC_API_DIR / "token"}, or
            2) Export the cookie in environment variable AOC_SESSION
        """
    )
    print(colored(msg, color="red"), file=sys.stderr)
    raise ConfigError("Missing session ID")


class Puzzle:
    """
    Input data and answer submission for one day's puzzle. The input is fetched at
    most once per instance: from memory if we have it already, otherwise from the
    cache directory, otherwise from adventofcode.com.
    """

    def __init__(self, year, day, http, cache_dir):
        self._year = year
        self._day = day
        self._http = http
        self._cache_dir = Path(cache_dir)
        self._input = None

    @property
    def year(self):
        return self._year

    @property
    def day(self):
        return self._day

    @property
    def url(self):
        """A link to the puzzle's description page on adventofcode.com."""
        return URL.format(year=self.year, day=self.day)

    @property
    def input_url(self):
        return self.url + "/input"

    @property
    def submit_url(self):
        return self.url + "/answer"

    @property
    def input_path(self):
        """Where the input data is cached on the filesystem."""
        return self._cache_dir / f"{self.year}-{self.day}.txt"

    def __repr__(self):
        return f"<{type(self).__name__}({self.year}, {self.day})>"

    def fetch_input(self) -> PuzzleInput:
        """
        This puzzle's input data. The first call reads it from the cache directory or,
        failing that, downloads it from the server. Later calls return the same data
        without any I/O. Downloaded data is not written to disk, use
        `save_input_to_disk` for that.
        """
        if self._input is None:
            data = self._read_input_from_disk()
            if data is None:
                data = self._download_input()
            self._input = data
        return self._input

    def _read_input_from_disk(self):
        # a cache file which can't be read is just a cache miss
        path = self.input_path
        try:
            data = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            log.debug("input cache miss %s", path)
            return None
        except (OSError, UnicodeDecodeError) as err:
            log.warning("input cache unreadable %s (%r)", path, err)
            return None
        log.debug("input cache hit %s", path)
        return data

    def _download_input(self):
        url = self.input_url
        log.info("getting data year=%s day=%s", self.year, self.day)
        try:
            response = self._http.get(url)
        except urllib3.exceptions.HTTPError as err:
            log.error("failed to get %s: %r", url, err)
            raise FetchError(f"failed to get {url}") from err
        if not 200 <= response.status < 300:
            if response.status == 404:
                raise PuzzleLockedError(f"{self.year}/{self.day} not available yet")
            log.error("got %s status code", response.status)
            log.error(response.data.decode(errors="replace"))
            raise FetchError(f"HTTP {response.status} at {url}")
        try:
            return response.data.decode()
        except UnicodeDecodeError as err:
            log.error("input at %s is not valid utf-8", url)
            raise FetchError(f"undecodable input at {url}") from err

    def save_input_to_disk(self):
        """
        Write the fetched input data into the cache directory, replacing any previous
        cache file for this puzzle. Raises `InputNotFetchedError` if `fetch_input` has
        not been successful yet.
        """
        if self._input is None:
            msg = f"no input for {self.year}/{self.day} yet, call fetch_input first"
            raise InputNotFetchedError(msg)
        path = self.input_path
        log.info("saving the puzzle input to %s", path)
        try:
            atomic_write_file(path, self._input)
        except OSError as err:
            raise DiskError(f"could not write {path}: {err}") from err
        return path

    def submit(self, answer, default_wait=timedelta(0)) -> AnswerResponse:
        """
        Post an answer for the first part of the puzzle. Returns `Accepted` or
        `Rejected`, the latter carrying how long the server wants you to wait before
        the next attempt. Nothing is retried here, backing off is up to the caller.

        If a rejection does not say how long to wait, `default_wait` is used. Pass
        `default_wait=None` to get the `ParseError` instead.
        """
        value = _coerce_val(answer)
        url = self.submit_url
        log.info("posting %r to %s", value, url)
        fields = {"answer": value, "level": "1"}
        try:
            response = self._http.post(url, fields=fields)
        except urllib3.exceptions.HTTPError as err:
            log.error("failed to post to %s: %r", url, err)
            raise SubmitError(f"failed to post to {url}") from err
        body = response.data.decode(errors="replace")
        if not 200 <= response.status < 300:
            log.error("got %s status code", response.status)
            log.error(body)
            raise SubmitError(f"HTTP {response.status} at {url}", body=body)
        soup = _get_soup(body)
        message = soup.article.text if soup.article is not None else body
        if "That's not the right answer." in body:
            log.warning("wrong answer: %s", value)
            wait_time = self._wait_time(parse_wait_time, body, default_wait)
            return Rejected(wait_time=wait_time, message=message)
        if "You gave an answer too recently" in body:
            log.warning("answer %s was submitted too recently", value)
            wait_time = self._wait_time(parse_cooldown, body, default_wait)
            return Rejected(wait_time=wait_time, message=message)
        if "That's the right answer" not in body:
            log.warning("Unrecognised submit message %r", message)
        return Accepted(message=message)

    @staticmethod
    def _wait_time(parser, body, default_wait):
        try:
            return parser(body)
        except ParseError:
            if default_wait is None:
                raise
            log.warning("wait time not found, using default of %s", default_wait)
            return default_wait


def _coerce_val(val):
    # adventofcode.com only accepts strings as answers, but many answers are numbers.
    if val is None or val in ("", b""):
        raise AocApiError(f"cowardly refusing to submit non-answer: {val!r}")
    if isinstance(val, bytes):
        val = val.decode()
    if isinstance(val, float) and val.is_integer():
        log.warning("coerced float value %r", val)
        val = int(val)
    if isinstance(val, int) and not isinstance(val, bool):
        val = str(val)
    if not isinstance(val, str):
        raise AocApiError(f"Failed to coerce {type(val).__name__} value {val!r} to str")
    return val
