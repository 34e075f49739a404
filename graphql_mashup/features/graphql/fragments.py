"""Schema fragments and the flattening pass of schema composition.

A fragment is one unit of schema text with an optional populate hook and
nested fragments. Composition works level by level:

- ``dependencies`` are flattened inline: their text is parsed together with
  the declaring fragment and their hooks run in the same level.
- ``extensions`` are deferred: they are composed in a later level, after the
  current level's populate hooks have run, so they may reference types and
  fields those hooks rely on.

Flattening is a pure function of the fragment tree. It produces an ordered
list of tagged nodes and never touches the engine.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from graphql import GraphQLSchema

    from graphql_mashup.features.graphql.engine import EngineFacade

__all__ = [
    "Fragment",
    "FragmentNode",
    "FragmentNodeKind",
    "Mashup",
    "PopulateHook",
    "flatten_fragments",
]

PopulateHook = Callable[["GraphQLSchema", "EngineFacade"], None]


@dataclass(frozen=True)
class Fragment:
    """One unit of schema text plus an optional populate hook.

    Attributes:
        schema: Schema definition language, usually ``extend type ...`` blocks.
        populate: Called with ``(schema, engine)`` once this fragment's text
            has been merged, typically to attach field resolvers.
        extensions: Fragments composed in a later level, after hooks ran.
        dependencies: Fragments merged in the same level as this one.

    Example:
        Fragment(
            schema="extend type Query { ping: String }",
            populate=lambda schema, engine: engine.set_resolver(
                schema, "Query", "ping", lambda _root, _info: "pong"
            ),
        )
    """

    schema: str = ""
    populate: PopulateHook | None = None
    extensions: Sequence[Fragment] = field(default_factory=tuple)
    dependencies: Sequence[Fragment] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.schema, str):
            raise TypeError(f"Fragment schema must be a string, got {type(self.schema).__name__}")
        if self.populate is not None and not callable(self.populate):
            raise TypeError("Fragment populate hook must be callable")
        # Lists become tuples so fragments stay hashable and immutable
        object.__setattr__(self, "extensions", _as_fragments(self.extensions, "extensions"))
        object.__setattr__(self, "dependencies", _as_fragments(self.dependencies, "dependencies"))


def _as_fragments(items: Iterable[Fragment] | None, label: str) -> tuple[Fragment, ...]:
    fragments = tuple(items or ())
    for item in fragments:
        if not isinstance(item, Fragment):
            raise TypeError(f"Fragment {label} must contain Fragment instances, got {type(item).__name__}")
    return fragments


class FragmentNodeKind(str, Enum):
    """Kind of a flattened node.

    - SCHEMA: schema text merged in the current level
    - POPULATE: hook run after the current level's text is merged
    - EXTENSION: fragment deferred to a later level
    """

    SCHEMA = "schema"
    POPULATE = "populate"
    EXTENSION = "extension"


NodePayload = Union[str, Callable[..., None], Fragment]


@dataclass(frozen=True)
class FragmentNode:
    """A tagged node produced by flattening."""

    kind: FragmentNodeKind
    payload: NodePayload
    depth: int = 0


@dataclass
class Mashup:
    """Ordered result of flattening one composition level."""

    nodes: list[FragmentNode] = field(default_factory=list)

    def _payloads(self, kind: FragmentNodeKind) -> list:
        return [node.payload for node in self.nodes if node.kind is kind]

    @property
    def schema_texts(self) -> list[str]:
        return self._payloads(FragmentNodeKind.SCHEMA)

    @property
    def populate_hooks(self) -> list[PopulateHook]:
        return self._payloads(FragmentNodeKind.POPULATE)

    @property
    def nested_extensions(self) -> list[Fragment]:
        return self._payloads(FragmentNodeKind.EXTENSION)

    @property
    def sdl(self) -> str:
        """All schema text of this level, one block per line."""
        return "\n".join(self.schema_texts)

    def __bool__(self) -> bool:
        return bool(self.nodes)


def flatten_fragments(fragments: Iterable[Fragment]) -> Mashup:
    """Flatten fragments depth-first into one composition level.

    For each fragment, in declaration order: its schema text, its populate
    hook, its dependencies (recursively, inline), then one deferred node per
    extension. Blank schema text is skipped.

    Args:
        fragments: Fragments making up the level.

    Returns:
        Mashup with the ordered nodes of the level.
    """
    mashup = Mashup()
    for fragment in fragments:
        _visit(fragment, mashup, depth=0)
    return mashup


def _visit(fragment: Fragment, mashup: Mashup, depth: int) -> None:
    if fragment.schema.strip():
        mashup.nodes.append(FragmentNode(FragmentNodeKind.SCHEMA, fragment.schema, depth))
    if fragment.populate is not None:
        mashup.nodes.append(FragmentNode(FragmentNodeKind.POPULATE, fragment.populate, depth))
    for dependency in fragment.dependencies:
        _visit(dependency, mashup, depth + 1)
    for extension in fragment.extensions:
        mashup.nodes.append(FragmentNode(FragmentNodeKind.EXTENSION, extension, depth + 1))
