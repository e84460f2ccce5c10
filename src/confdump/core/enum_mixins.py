# topmark:header:start
#
#   project      : ConfDump
#   file         : enum_mixins.py
#   file_relpath : src/confdump/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""String enums with a stable key, a human label and parse aliases.

`KeyedStrEnum` backs the user-selectable vocabularies (dump scopes, output
formats). Members are declared as ``(key, label)`` or ``(key, label, aliases)``
tuples:

```python
class DumpScope(KeyedStrEnum):
    CHANGED = ("changed", "Settings that differ from their default", ("n",))

assert DumpScope.parse("N") is DumpScope.CHANGED
assert DumpScope.choices() == ["changed"]
```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _token(text: str) -> str:
    # "All With-Hidden" and "all_with_hidden" compare equal
    return text.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """`str` enum whose value is the key shown to and typed by users.

    Attributes:
        label (str): One-line description used in help texts.
        aliases (tuple[str, ...]): Extra spellings accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(cls: type[_KS], key: str, label: str, aliases: Iterable[str] = ()) -> _KS:
        member: _KS = str.__new__(cls, key)
        member._value_ = key
        member.label = label
        member.aliases = tuple(aliases)
        return member

    @property
    def key(self) -> str:
        """The member's value as a plain `str`."""
        return str(self.value)

    def matches(self, text: str) -> bool:
        """Whether ``text`` spells this member's key, name or one of its aliases."""
        token = _token(text)
        return token in {_token(self.key), _token(self.name), *map(_token, self.aliases)}

    @classmethod
    def parse(cls: type[_KS], text: str | None) -> _KS | None:
        """Return the member spelled by ``text`` (case-insensitive), or `None`."""
        if text is None:
            return None
        return next((member for member in cls if member.matches(text)), None)

    @classmethod
    def choices(cls) -> list[str]:
        """Return every member key in declaration order."""
        return [member.key for member in cls]
