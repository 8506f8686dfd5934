from . import cli
from . import exceptions
from . import get
from . import models
from . import types
from . import utils
from .exceptions import AocApiError
from .get import get_data
from .models import Puzzle
from .models import Session
from .types import Accepted
from .types import Rejected
from .version import __version__

__all__ = [
    "Accepted",
    "AocApiError",
    "Puzzle",
    "Rejected",
    "Session",
    "cli",
    "exceptions",
    "get",
    "get_data",
    "models",
    "types",
    "utils",
    "with_cookie",
    "__version__",
]

with_cookie = Session.with_cookie
