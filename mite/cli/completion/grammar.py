"""The completion grammar of the `mite` command line."""

from __future__ import annotations

from types import MappingProxyType

from mite.models.types import EntityKind
from mite.types import EntitySource

from ..listing.kinds import (
    FILTER_ARCHIVED,
    FILTER_BILLABLE,
    FILTER_CUSTOMER,
    FILTER_CUSTOMER_ID,
    LIST_KINDS,
    ListKind,
)
from ..render import FORMATS
from .dispatcher import (
    ArgumentProvider,
    ChainProvider,
    CompletionProvider,
    Dispatcher,
    EntityIdProvider,
    EntityNameProvider,
    OptionProvider,
    StaticProvider,
    Suggestion,
    ValueSource,
)

SHELLS = ("bash", "zsh", "fish")

_YES_NO = (Suggestion("yes"), Suggestion("no"))
_ARCHIVED_VALUES = (*_YES_NO, Suggestion("all"))
_FORMAT_VALUES = tuple(Suggestion(fmt) for fmt in FORMATS)

# position of the id argument in `mite <noun> <verb> <id>`
_ID_POSITION = 3


def _words(*pairs: tuple[str, str]) -> tuple[Suggestion, ...]:
    return tuple(Suggestion(name, description) for name, description in pairs)


def list_provider(kind: ListKind, source: EntitySource) -> OptionProvider:
    """Flags and flag values of one list command."""
    noun = kind.command
    flags: list[Suggestion] = []
    values: dict[str, ValueSource] = {
        "--sort": tuple(Suggestion(option) for option in kind.sort_options),
        "--columns": tuple(Suggestion(key) for key in kind.registry.keys()),
        "--format": _FORMAT_VALUES,
        "-f": _FORMAT_VALUES,
        "--search": (Suggestion("query"),),
    }
    if kind.supports(FILTER_ARCHIVED):
        flags.append(Suggestion("--archived", f"defines whether archived {noun} should be shown"))
        values["--archived"] = _ARCHIVED_VALUES
        values["-a"] = _ARCHIVED_VALUES
    if kind.supports(FILTER_BILLABLE):
        flags.append(Suggestion("--billable", f"show only billable or non-billable {noun}"))
        values["--billable"] = _YES_NO
    flags.extend(
        _words(
            ("--format", "defines the output format"),
            ("--columns", "define the columns that are shown"),
        )
    )
    if kind.supports(FILTER_CUSTOMER):
        flags.append(
            Suggestion(
                "--customer",
                f"given a regular expression will list only {noun} "
                "where the customer's name matches",
            )
        )
        values["--customer"] = EntityNameProvider(source, EntityKind.CUSTOMER)
    if kind.supports(FILTER_CUSTOMER_ID):
        flags.append(
            Suggestion(
                "--customer_id", f"given a customer id will list only {noun} for that customer"
            )
        )
        values["--customer_id"] = EntityIdProvider(source, EntityKind.CUSTOMER)
    flags.extend(
        _words(
            ("--search", f"given a query will show only {noun} whose name matches"),
            ("--sort", f"defines the order of {noun}"),
        )
    )
    return OptionProvider(flags=tuple(flags), values=MappingProxyType(values))


def _delete_provider(kind: EntityKind, source: EntitySource) -> CompletionProvider:
    return ChainProvider((EntityIdProvider(source, kind), StaticProvider()))


def _update_provider(
    kind: EntityKind, source: EntitySource, flags: tuple[Suggestion, ...]
) -> CompletionProvider:
    values: dict[str, ValueSource] = {"--archived": _YES_NO}
    if any(flag.name == "--billable" for flag in flags):
        values["--billable"] = _YES_NO
    return ArgumentProvider(
        position=_ID_POSITION,
        argument=EntityIdProvider(source, kind),
        fallback=OptionProvider(flags=flags, values=MappingProxyType(values)),
    )


def _noun_dispatcher(
    kind: EntityKind, source: EntitySource, update_flags: tuple[Suggestion, ...]
) -> Dispatcher:
    noun = kind.value
    return Dispatcher(
        routes=MappingProxyType(
            {
                "delete": _delete_provider(kind, source),
                "update": _update_provider(kind, source, update_flags),
            }
        ),
        fallback=StaticProvider(
            _words(
                ("delete", f"delete a single {noun} by its id"),
                ("update", f"update a single {noun} by its id"),
            )
        ),
        position=2,
    )


_CUSTOMER_UPDATE_FLAGS = _words(
    ("--name", "new name of the customer"),
    ("--note", "new note of the customer"),
    ("--hourly-rate", "new hourly rate in cents"),
    ("--archived", "archive or unarchive the customer"),
)

_SERVICE_UPDATE_FLAGS = _words(
    ("--name", "new name of the service"),
    ("--note", "new note of the service"),
    ("--hourly-rate", "new hourly rate in cents"),
    ("--billable", "whether the service is billable"),
    ("--archived", "archive or unarchive the service"),
)


def build_dispatcher(source: EntitySource) -> Dispatcher:
    """Top-level dispatcher, routing on the verb following the program name."""
    routes: dict[str, CompletionProvider] = {
        command: list_provider(kind, source) for command, kind in LIST_KINDS.items()
    }
    routes["customer"] = _noun_dispatcher(EntityKind.CUSTOMER, source, _CUSTOMER_UPDATE_FLAGS)
    routes["service"] = _noun_dispatcher(EntityKind.SERVICE, source, _SERVICE_UPDATE_FLAGS)
    routes["whoami"] = StaticProvider()
    routes["completion"] = StaticProvider(
        tuple(Suggestion(shell) for shell in SHELLS), include_help=False
    )
    routes["config"] = Dispatcher(
        routes=MappingProxyType(
            {
                "path": StaticProvider(),
                "init": StaticProvider(
                    _words(("--force", "overwrite an existing config file"))
                ),
            }
        ),
        fallback=StaticProvider(
            _words(
                ("path", "print the location of the config file"),
                ("init", "create a config file with commented defaults"),
            )
        ),
        position=2,
    )

    verbs = [
        Suggestion(command, kind.description) for command, kind in LIST_KINDS.items()
    ]
    verbs.extend(
        _words(
            ("whoami", "show the user the API key belongs to"),
            ("config", "inspect or create the config file"),
            ("completion", "print the shell completion script"),
        )
    )
    # `customer` and `service` are routed but not offered: they have no command here
    return Dispatcher(
        routes=MappingProxyType(routes),
        fallback=StaticProvider(tuple(verbs)),
        position=1,
    )
