from __future__ import annotations

from datetime import timedelta
from typing import NamedTuple
from typing import Union


PuzzleInput = str
"""A user's input data for one puzzle, exactly as served by adventofcode.com"""
WaitTime = timedelta
"""How long the server wants you to wait before submitting another answer"""


class Accepted(NamedTuple):
    """The server did not reject the submitted answer

    `message` is the text of the response page's article, for display.
    """

    message: str = ""


class Rejected(NamedTuple):
    """The submitted answer was wrong, or it was submitted too soon

    Resubmitting before `wait_time` has elapsed will be refused by the server.
    """

    wait_time: WaitTime
    message: str = ""


AnswerResponse = Union[Accepted, Rejected]
"""Result of a submission attempt, see `aocapi.models.Puzzle.submit`"""
