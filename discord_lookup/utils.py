import json
import logging
import sys

from datetime import datetime, timezone
from typing import Optional, Any, TextIO, Union

from .errors import InvalidPayload

DISCORD_EPOCH = 1420070400000

_log = logging.getLogger(__name__)

__all__ = (
    "DISCORD_EPOCH",
    "MISSING",
    "get_json_string",
    "setup_logger",
)


class _MissingType:
    """
    A class to represent a missing value in a dictionary
    This is used in favour of accepting None as a value
    """
    def __bool__(self) -> bool:
        return False

    def __eq__(self, other) -> bool:
        return False

    def __hash__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING: Any = _MissingType()


def snowflake_time(id: Union[str, int]) -> datetime:
    """
    Get the datetime from a discord snowflake

    Parameters
    ----------
    id: `Union[str, int]`
        The snowflake to get the datetime from

    Returns
    -------
    `datetime`
        The datetime of the snowflake
    """
    return datetime.fromtimestamp(
        ((int(id) >> 22) + DISCORD_EPOCH) / 1000,
        tz=timezone.utc
    )


def parse_time(ts: Optional[str]) -> Optional[datetime]:
    """
    Parse a timestamp from a string

    Parameters
    ----------
    ts: `Optional[str]`
        The timestamp to parse

    Returns
    -------
    `Optional[datetime]`
        The datetime of the timestamp, None if empty or not ISO 8601
    """
    if not ts:
        return None

    try:
        return datetime.fromisoformat(ts)
    except ValueError:
        return None


def is_header_safe(value: str) -> bool:
    """
    Check if a string can be sent as a HTTP header value

    Only visible ASCII characters, spaces and tabs are accepted

    Parameters
    ----------
    value: `str`
        The value to check

    Returns
    -------
    `bool`
        Whether the value is safe to use
    """
    return all(
        c == "\t" or 32 <= ord(c) < 127
        for c in value
    )


def ensure_object(data: Any, *, model: str) -> dict:
    """ `dict`: Returns the payload if it is a JSON object, raises `InvalidPayload` otherwise """
    if not isinstance(data, dict):
        raise InvalidPayload(
            model, "*",
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def get_typed(
    data: dict,
    key: str,
    expected: type,
    *,
    model: str,
    default: Any = MISSING
) -> Any:
    """
    Get a value of a specific JSON type from a dictionary

    A missing key and a `null` value are treated the same way.

    Parameters
    ----------
    data: `dict`
        The payload to read from
    key: `str`
        The key to read
    expected: `type`
        The Python type the JSON value must have
    model: `str`
        Name of the model being parsed, used in the error
    default: `Any`
        Value to return when the key is missing, leave empty to make the key required

    Returns
    -------
    `Any`
        The value found, or the default

    Raises
    ------
    `InvalidPayload`
        - The key is required but missing
        - The value has the wrong type
    """
    value = data.get(key, None)
    if value is None:
        if default is MISSING:
            raise InvalidPayload(model, key, "missing required value")
        return default

    # bool is a subclass of int, JSON does not agree
    if isinstance(value, bool) and expected is not bool:
        raise InvalidPayload(model, key, f"expected {expected.__name__}, got bool")

    if not isinstance(value, expected):
        raise InvalidPayload(
            model, key,
            f"expected {expected.__name__}, got {type(value).__name__}"
        )

    return value


def get_colour(
    data: dict,
    key: str,
    *,
    model: str
) -> Optional[int]:
    """
    Get a colour from a dictionary, either as an integer or a `#rrggbb` string

    Parameters
    ----------
    data: `dict`
        The payload to read from
    key: `str`
        The key to read
    model: `str`
        Name of the model being parsed, used in the error

    Returns
    -------
    `Optional[int]`
        The colour value, None if not set

    Raises
    ------
    `InvalidPayload`
        The value is neither an integer nor a hex string
    """
    value = data.get(key, None)
    if value is None:
        return None

    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if isinstance(value, str):
        try:
            return int(value.removeprefix("#"), 16)
        except ValueError:
            pass

    raise InvalidPayload(model, key, f"invalid colour value {value!r}")


def _json_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, (set, frozenset)):
        return list(obj)

    raise TypeError(
        f"Object of type {type(obj).__name__} is not JSON serializable"
    )


def get_json_string(value: Any) -> str:
    """
    Get the compact JSON string of a value

    Models are serialized through their `to_dict()` method,
    so the key order is the same as the model's field order.
    This never raises, if the value can not be serialized
    the error is logged and `"[]"` is returned instead.

    Parameters
    ----------
    value: `Any`
        Any JSON compatible value, model or list of models

    Returns
    -------
    `str`
        The JSON string
    """
    try:
        return json.dumps(
            value,
            default=_json_default,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False
        )
    except (TypeError, ValueError, RecursionError) as e:
        _log.error(f"Failed to serialize {type(value).__name__} to JSON: {e}")
        return "[]"


class CustomFormatter(logging.Formatter):
    reset = "\x1b[0m"
    white = "\x1b[38;21m"
    grey = "\x1b[38;5;240m"

    # (label, primary, secondary)
    levels: dict[int, tuple[str, str, str]] = {
        logging.DEBUG: ("DEBUG", "\x1b[38;5;240m", "\x1b[38;5;244m"),
        logging.INFO: ("INFO", "\x1b[38;5;39m", "\x1b[38;5;75m"),
        logging.WARNING: ("WARN", "\x1b[38;5;226m", "\x1b[38;5;229m"),
        logging.ERROR: ("ERROR", "\x1b[38;5;196m", "\x1b[38;5;203m"),
        logging.CRITICAL: ("CRIT", "\x1b[31;1m", "\x1b[38;5;197m"),
    }

    def __init__(self, datefmt: Optional[str] = None):
        super().__init__()
        self._datefmt = datefmt

    def _prefix_fmt(self, levelno: int) -> str:
        name, primary, secondary = self.levels.get(
            levelno, ("OTHER", self.white, "\x1b[38;5;250m")
        )

        return (
            f"{secondary}[ {primary}{name.rjust(5)}{self.reset} "
            f"{secondary}]{self.reset}"
        )

    def format(self, record: logging.LogRecord) -> str:
        """ Format the log """
        formatter = logging.Formatter(
            f"{self._prefix_fmt(record.levelno)} "
            f"{self.grey}%(asctime)s{self.reset} "
            f"%(message)s{self.reset}",
            datefmt=self._datefmt
        )

        return formatter.format(record)


def setup_logger(
    *,
    level: int = logging.INFO,
    stream: TextIO = sys.stdout
) -> None:
    """
    Setup the logger of the library

    Calling it again only changes the level

    Parameters
    ----------
    level: `int`
        The level of the logger
    stream: `TextIO`
        Where to write the logs, defaults to stdout
    """
    lib, _, _ = __name__.partition(".")
    logger = logging.getLogger(lib)
    logger.setLevel(level)

    if any(isinstance(h.formatter, CustomFormatter) for h in logger.handlers):
        return

    handler = logging.StreamHandler(stream)
    handler.setFormatter(CustomFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
