from __future__ import annotations

import numbers
from collections import OrderedDict
from typing import Any, Iterable, Iterator, Mapping, Tuple, Union

from xgbridge.errors import InvalidParameterError


def encode_value(value: Any) -> str:
    """String-encode a parameter value the way the native library parses it."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (numbers.Real, str)):
        return str(value)
    raise TypeError(f"Cannot encode {type(value).__name__}")


class HyperparameterSet:
    """
    Ordered name -> string-encoded value mapping.

    Entries are applied to a boosting session in insertion order; some tree
    parameters depend on what was set before them. ``set()`` on an existing name
    overwrites its value and keeps its original position; a name repeated in
    the constructor input is rejected rather than silently collapsed.

    Example:
        params = HyperparameterSet([("objective", "binary:logistic"), ("max_depth", 6)])
        list(params)  # [("objective", "binary:logistic"), ("max_depth", "6")]
    """

    def __init__(self, entries: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None] = None):
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        if entries is None:
            return
        items = entries.items() if isinstance(entries, Mapping) else entries
        for name, value in items:
            if name in self._entries:
                raise InvalidParameterError(name, value, diagnostic="parameter given more than once")
            self.set(name, value)

    @classmethod
    def coerce(cls, params) -> "HyperparameterSet":
        if isinstance(params, cls):
            return params
        return cls(params)

    def set(self, name: str, value: Any) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidParameterError(name, value, diagnostic="parameter name must be a non-empty string")
        try:
            self._entries[name] = encode_value(value)
        except TypeError as e:
            raise InvalidParameterError(name, value, diagnostic=str(e)) from e

    def __getitem__(self, name: str) -> str:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict:
        return dict(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in self._entries.items())
        return f"HyperparameterSet({inner})"
