# topmark:header:start
#
#   project      : ConfDump
#   file         : cli_types.py
#   file_relpath : src/confdump/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click parameter types for ConfDump options."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, NoReturn, Protocol, TypeVar

import click

from confdump.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

K = TypeVar("K", bound=KeyedStrEnum)


class EnumChoiceParam(ParamTypeBase, Generic[K]):
    """Converts an option value into a `KeyedStrEnum` member.

    Keys, member names and aliases are accepted through `KeyedStrEnum.parse`,
    so ``--scope non-default`` and ``--scope CHANGED`` both select
    `DumpScope.CHANGED`. Help, errors and completion list only the keys.
    """

    enum_cls: type[K]
    name: str

    def __init__(self, enum_cls: type[K]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()

    def convert(
        self,
        value: str | K | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> K | None:
        """Return the member spelled by ``value``; reject unknown spellings."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        member = self.enum_cls.parse(str(value))
        if member is None:
            self._reject(str(value), param, ctx)
        return member

    def _reject(
        self,
        text: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        choices = ", ".join(self.enum_cls.choices())
        raise click.BadParameter(
            f"Invalid value '{text}'. Must be one of: {choices}", ctx=ctx, param=param
        )

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        """Show ``[key1|key2|...]`` in the usage line."""
        return f"[{'|'.join(self.enum_cls.choices())}]"

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Complete member keys (``eval "$(_CONFDUMP_COMPLETE=bash_source confdump)"``)."""
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = incomplete.lower()
        return [
            RuntimeCompletionItem(member.key, help=member.label)
            for member in self.enum_cls
            if member.key.startswith(prefix)
        ]

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"
