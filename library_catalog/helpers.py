"""Higher-order helpers: record formatters and memoization."""
import dataclasses
from collections.abc import Mapping
import json
from functools import wraps
from typing import Any, Callable, Dict, List
import logging

from library_catalog.errors import InvalidArgumentError
from library_catalog.parse import get_field, is_record_sequence

logger = logging.getLogger(__name__)


def _default_formatter(record: Any) -> str:
    return f"{get_field(record, 'title')} by {get_field(record, 'author')} ({get_field(record, 'category')})"


def make_formatter(fn: Any) -> Callable[[Any], List[str]]:
    """
    Build a function that formats every record in a sequence.

    Args:
        fn: Callable taking one record and returning a string. Anything not
            callable is replaced by "{title} by {author} ({category})".

    Returns:
        Function mapping a sequence of records to a list of strings. It
        raises InvalidArgumentError for non-sequence input.
    """
    if not callable(fn):
        logger.warning(f"Formatter of type {type(fn).__name__} is not callable, using default")
        fn = _default_formatter

    def format_records(records: Any) -> List[str]:
        if not is_record_sequence(records):
            raise InvalidArgumentError(f"Expected a sequence of records, got {type(records).__name__}")

        formatted = []
        for record in records:
            text = fn(record)
            if not text:
                title = get_field(record, "title") or "Unknown Title"
                author = get_field(record, "author") or "Unknown Author"
                text = f"{title} by {author}"
            formatted.append(text)
        return formatted

    return format_records


def _typed(value: Any) -> Any:
    """JSON-ready form of ``value`` that keeps type names, so 1 and "1" differ."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return [type(value).__name__, value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [type(value).__qualname__, _typed(dataclasses.asdict(value))]
    if isinstance(value, Mapping):
        items = [[_typed(k), _typed(v)] for k, v in value.items()]
        return ["dict", sorted(items, key=repr)]
    if isinstance(value, (list, tuple)):
        return [type(value).__name__, [_typed(item) for item in value]]
    if isinstance(value, (set, frozenset)):
        return [type(value).__name__, sorted((_typed(item) for item in value), key=repr)]
    return ["object", type(value).__qualname__, repr(value)]


def _cache_key(fn: Callable, args: tuple, kwargs: Dict[str, Any]) -> str:
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or "anonymous"
    return f"{name}:{json.dumps(_typed([list(args), kwargs]))}"


def memoize(fn: Callable) -> Callable:
    """
    Cache ``fn`` results by its arguments.

    Arguments are serialized to JSON with their type names (dataclasses via
    ``asdict``) to build the key, so equal-content records share an entry
    while ``{1: "a"}`` and ``{"1": "a"}`` do not. Other objects are keyed by
    ``repr``; when that is the default ``<... at 0x...>`` form, a new object
    reusing a collected object's address can hit its stale entry. Calls that
    raise are not cached. Entries never expire; use ``wrapper.cache_clear()``
    to reset.
    """
    cache: Dict[str, Any] = {}

    @wraps(fn)
    def wrapper(*args, **kwargs):
        key = _cache_key(fn, args, kwargs)
        if key in cache:
            logger.debug(f"Memoize hit: {key}")
            return cache[key]

        result = fn(*args, **kwargs)
        cache[key] = result
        return result

    wrapper.cache_clear = cache.clear
    wrapper.cache_size = lambda: len(cache)
    return wrapper
