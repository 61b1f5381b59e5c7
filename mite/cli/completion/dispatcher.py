"""
Completion providers and the dispatcher that routes between them.

Every provider is an async callable taking a `CompletionContext` and returning
suggestions. Providers are stateless: each shell invocation builds a fresh
context and the result is a function of that context (plus, for entity-backed
providers, whatever the `EntitySource` currently returns).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from mite.models.types import EntityKind
from mite.types import EntitySource

from ..listing.filters import fetch_and_filter
from ..listing.models import FilterSpec

# `--help` is only offered while fewer positional words have been entered.
HELP_WORD_LIMIT = 3


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """
    Snapshot of the command line at the time the shell asked for completion.

    Attributes:
        last_partial: Characters of the current word typed before the cursor
        prev: The word before the current one
        words: Index of the word being completed (0 is the program name)
        line: The complete input line
    """

    last_partial: str = ""
    prev: str = ""
    words: int = 0
    line: str = ""

    def token(self, position: int) -> str | None:
        tokens = self.line.split()
        if 0 <= position < len(tokens):
            return tokens[position]
        return None


@dataclass(frozen=True, slots=True)
class Suggestion:
    name: str
    description: str | None = None


HELP = Suggestion("--help", "show help message")


class CompletionProvider(Protocol):
    async def __call__(self, context: CompletionContext) -> list[Suggestion]: ...


def _with_help(suggestions: Sequence[Suggestion], context: CompletionContext) -> list[Suggestion]:
    if context.words < HELP_WORD_LIMIT:
        return [*suggestions, HELP]
    return list(suggestions)


@dataclass(frozen=True, slots=True)
class Dispatcher:
    """
    Route on the word at `position` of the line.

    When that word names a route the unchanged context is forwarded to the
    route's provider; otherwise `fallback` answers.
    """

    routes: Mapping[str, CompletionProvider]
    fallback: CompletionProvider
    position: int = 1

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        token = context.token(self.position)
        provider = self.routes.get(token) if token is not None else None
        if provider is not None:
            return await provider(context)
        return await self.fallback(context)


@dataclass(frozen=True, slots=True)
class StaticProvider:
    """A fixed list of words, plus `--help` early in the line."""

    suggestions: tuple[Suggestion, ...] = ()
    include_help: bool = True

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        if self.include_help:
            return _with_help(self.suggestions, context)
        return list(self.suggestions)


ValueSource = Sequence[Suggestion] | CompletionProvider


@dataclass(frozen=True, slots=True)
class OptionProvider:
    """
    Flags of one command and the values those flags accept.

    When `prev` is a value-taking flag its values are returned (a static list or
    another provider); otherwise the flag list itself.
    """

    flags: tuple[Suggestion, ...]
    values: Mapping[str, ValueSource] = field(default_factory=dict)

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        values = self.values.get(context.prev)
        if values is None:
            return _with_help(self.flags, context)
        if isinstance(values, Sequence):
            return list(values)
        return await values(context)


@dataclass(frozen=True, slots=True)
class ArgumentProvider:
    """Complete the positional argument up to `position`, then defer to `fallback`."""

    position: int
    argument: CompletionProvider
    fallback: CompletionProvider

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        if context.words <= self.position:
            return await self.argument(context)
        return await self.fallback(context)


@dataclass(frozen=True, slots=True)
class ChainProvider:
    """Concatenate the suggestions of several providers, in order."""

    providers: tuple[CompletionProvider, ...]

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        suggestions: list[Suggestion] = []
        for provider in self.providers:
            suggestions.extend(await provider(context))
        return suggestions


@dataclass(frozen=True, slots=True)
class EntityIdProvider:
    """Live ids of every entity of `kind`, described by their name."""

    source: EntitySource
    kind: EntityKind

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        entities = await fetch_and_filter(self.source, self.kind, FilterSpec())
        return [Suggestion(str(entity.id), entity.name or None) for entity in entities]


@dataclass(frozen=True, slots=True)
class EntityNameProvider:
    """Live names of every entity of `kind`."""

    source: EntitySource
    kind: EntityKind

    async def __call__(self, context: CompletionContext) -> list[Suggestion]:
        entities = await fetch_and_filter(self.source, self.kind, FilterSpec())
        return [Suggestion(entity.name) for entity in entities if entity.name]
