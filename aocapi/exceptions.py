class AocApiError(Exception):
    """base exception for this package"""


class ConfigError(AocApiError):
    """the session token is missing/malformed, transport can not be built"""


class FetchError(AocApiError):
    """downloading the puzzle input failed"""


class PuzzleLockedError(FetchError):
    """trying to access input before the unlock"""


class DiskError(AocApiError):
    """the input cache could not be written"""


class InputNotFetchedError(AocApiError):
    """saving the input to disk before it has been fetched"""


class SubmitError(AocApiError):
    """posting an answer failed"""

    def __init__(self, msg, body=""):
        super().__init__(msg)
        self.body = body


class ParseError(AocApiError):
    """the wait time could not be found in the server's response"""
