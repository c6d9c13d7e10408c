"""
Outbound header values

A header is either a literal value or a function of the outbound payloads (for
example a signature over the request body), evaluated once per cycle right
before dispatch.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

Payloads = List[Dict[str, Any]]


@dataclass(frozen=True)
class StaticHeader:
    value: str

    def evaluate(self, payloads: Payloads) -> str:
        return self.value


@dataclass(frozen=True)
class ComputedHeader:
    fn: Callable[[Payloads], Any]

    def evaluate(self, payloads: Payloads) -> Any:
        return self.fn(payloads)


HeaderValue = Union[StaticHeader, ComputedHeader]


def to_header_value(value: Any) -> HeaderValue:
    if isinstance(value, (StaticHeader, ComputedHeader)):
        return value
    if callable(value):
        return ComputedHeader(value)
    return StaticHeader(str(value))


class HeaderSet:
    """Ordered header collection where the first registration of a name wins"""

    def __init__(self):
        self._headers: Dict[str, HeaderValue] = {}
        self._names: Dict[str, str] = {}  # lower-cased name -> registered name

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._names

    def __len__(self) -> int:
        return len(self._headers)

    def add(self, name: str, value: Any) -> bool:
        """Register a header unless the name is already present

        Args:
            name: Header name (case-insensitive)
            value: Literal value or callable receiving the outbound payloads

        Returns:
            bool: Whether the header was registered
        """
        if value is None or value == "" or name in self:
            return False
        self._names[name.lower()] = name
        self._headers[name] = to_header_value(value)
        return True

    def update(self, headers: Dict[str, Any]) -> None:
        for name, value in headers.items():
            self.add(name, value)

    def copy(self) -> "HeaderSet":
        clone = HeaderSet()
        clone._headers = dict(self._headers)
        clone._names = dict(self._names)
        return clone

    def render(self, payloads: Payloads) -> Dict[str, str]:
        """Evaluate every header against the outbound payloads

        Computed headers returning a falsy value are left out.
        """
        rendered = {}
        for name, header in self._headers.items():
            value = header.evaluate(payloads)
            if value is None or value == "":
                continue
            rendered[name] = str(value)
        return rendered
