"""
Format token resolution.

Turns a caller-supplied format token into the symbolic pattern handed to
the renderer: alias names expand through the alias table, anything else
is passed through untouched.
"""

from datepipe.core.aliases import DEFAULT_ALIASES, AliasTable
from datepipe.core.types import FormatToken, SymbolicPattern


class PatternResolver:
    """Expands alias names into symbolic patterns."""

    def __init__(self, aliases: AliasTable = DEFAULT_ALIASES) -> None:
        self.aliases = aliases

    def is_alias(self, token: FormatToken) -> bool:
        return token in self.aliases

    def resolve(self, token: FormatToken) -> SymbolicPattern:
        """
        Resolve a format token.

        Args:
            token: Alias name or literal symbolic pattern

        Returns:
            The aliased pattern, or ``token`` itself when it is not an alias.
            Literal patterns are not checked here.
        """
        return self.aliases.get(token, token)


def resolve_pattern(
    token: FormatToken, aliases: AliasTable = DEFAULT_ALIASES
) -> SymbolicPattern:
    """Resolve ``token`` against ``aliases``."""
    return PatternResolver(aliases).resolve(token)
