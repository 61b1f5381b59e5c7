"""
Glue between the shell and the completion dispatcher.

The generated scripts call `mite __complete <shell>` with the tabtab-style
`COMP_LINE`, `COMP_CWORD` and `COMP_POINT` variables set; replies are printed
one per line in the syntax the shell's completion function expects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence

from mite.client import AsyncMite
from mite.models.entities import MiteModel
from mite.models.types import EntityKind
from mite.types import RetrievalOptions

from .dispatcher import CompletionContext, Suggestion

PROG = "mite"

_BASH_SCRIPT = """\
###-begin-{prog}-completion-###
_{prog}_completion() {{
    local IFS=$'\\n'
    COMPREPLY=($(COMP_CWORD="$COMP_CWORD" COMP_LINE="$COMP_LINE" COMP_POINT="$COMP_POINT" \\
        {prog} __complete bash 2>/dev/null))
}}
complete -o default -F _{prog}_completion {prog}
###-end-{prog}-completion-###
"""

_ZSH_SCRIPT = """\
###-begin-{prog}-completion-###
_{prog}_completion() {{
    local -a reply
    local si=$IFS
    IFS=$'\\n' reply=($(COMP_CWORD="$((CURRENT-1))" COMP_LINE="$BUFFER" COMP_POINT="$CURSOR" \\
        {prog} __complete zsh 2>/dev/null))
    IFS=$si
    _describe 'values' reply
}}
compdef _{prog}_completion {prog}
###-end-{prog}-completion-###
"""

_FISH_SCRIPT = """\
###-begin-{prog}-completion-###
function __{prog}_completion
    set -l line (commandline -cp)
    set -l tokens (commandline -co)
    COMP_CWORD=(count $tokens) COMP_LINE=$line COMP_POINT=(string length -- $line) \\
        {prog} __complete fish 2>/dev/null
end
complete -c {prog} -f -a '(__{prog}_completion)'
###-end-{prog}-completion-###
"""

_SCRIPTS: Mapping[str, str] = {"bash": _BASH_SCRIPT, "zsh": _ZSH_SCRIPT, "fish": _FISH_SCRIPT}


def completion_script(shell: str, *, prog: str = PROG) -> str:
    try:
        template = _SCRIPTS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell: {shell}") from None
    return template.format(prog=prog)


def parse_env(environ: Mapping[str, str]) -> CompletionContext | None:
    """
    Build a completion context from the shell environment.

    Returns None when the process was not started by a completion script.
    """
    line = environ.get("COMP_LINE", "")
    cword = environ.get("COMP_CWORD", "")
    point = environ.get("COMP_POINT", "")
    if not (line and cword and point):
        return None
    try:
        words = int(cword)
        cursor = int(point)
    except ValueError:
        return None
    parts = line.split(" ")
    prev = parts[-2] if len(parts) > 1 else ""
    last_partial = line[:cursor].split(" ")[-1]
    return CompletionContext(last_partial=last_partial, prev=prev, words=words, line=line)


def filter_suggestions(suggestions: Iterable[Suggestion], partial: str) -> list[Suggestion]:
    return [suggestion for suggestion in suggestions if suggestion.name.startswith(partial)]


def _zsh_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace(":", "\\:")


def format_replies(suggestions: Sequence[Suggestion], shell: str) -> list[str]:
    replies: list[str] = []
    for suggestion in suggestions:
        description = " ".join((suggestion.description or "").split())
        if shell == "zsh":
            name = _zsh_escape(suggestion.name)
            replies.append(f"{name}:{description}" if description else name)
        elif shell == "fish":
            replies.append(f"{suggestion.name}\t{description}" if description else suggestion.name)
        else:
            replies.append(suggestion.name)
    return replies


class LazyClientSource:
    """
    EntitySource that creates its client on first use.

    Most completions are static; they must work without credentials and must
    not open a connection.
    """

    def __init__(self, factory: Callable[[], AsyncMite]):
        self._factory = factory
        self._client: AsyncMite | None = None

    def _get_client(self) -> AsyncMite:
        if self._client is None:
            self._client = self._factory()
        return self._client

    async def get_active(self, kind: EntityKind, options: RetrievalOptions) -> Sequence[MiteModel]:
        return await self._get_client().get_active(kind, options)

    async def get_archived(
        self, kind: EntityKind, options: RetrievalOptions
    ) -> Sequence[MiteModel]:
        return await self._get_client().get_archived(kind, options)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
