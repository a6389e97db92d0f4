"""
Named format aliases.

The alias table maps the eight predefined format names onto the symbolic
patterns they stand for. It is built once and never modified; components
that need it receive it explicitly.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

DEFAULT_FORMAT = "mediumDate"


@dataclass(frozen=True)
class AliasTable:
    """
    Read-only mapping of alias name to symbolic pattern.

    Example:
        >>> DEFAULT_ALIASES["shortTime"]
        'jm'
    """

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy, then freeze, so later changes to the source dict do not leak in
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __contains__(self, alias: object) -> bool:
        return alias in self.entries

    def __getitem__(self, alias: str) -> str:
        return self.entries[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, alias: str, default: Optional[str] = None) -> Optional[str]:
        return self.entries.get(alias, default)

    def items(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(self.entries.items())


DEFAULT_ALIASES = AliasTable(
    {
        "medium": "yMMMdjms",
        "short": "yMdjm",
        "fullDate": "yMMMMEEEEd",
        "longDate": "yMMMMd",
        "mediumDate": "yMMMd",
        "shortDate": "yMd",
        "mediumTime": "jms",
        "shortTime": "jm",
    }
)
