"""
Data model for i18n-routes.

A locale record bundles the path and text dictionaries of one language.
Path dictionaries are nested: a segment maps either to its translation or to
a node holding the translation of the segment as a directory index plus the
translations of its children.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

INDEX_KEY = "index"


@dataclass(frozen=True)
class PathLeaf:
    """Translated segment."""

    value: str


@dataclass(frozen=True)
class PathNode:
    """Directory segment with an optional index translation and children."""

    index: str | None = None
    children: dict[str, PathEntry] = field(default_factory=dict)


PathEntry = PathLeaf | PathNode
PathTree = Mapping[str, PathEntry]


def build_path_tree(raw: Mapping[str, Any]) -> dict[str, PathEntry]:
    """
    Convert a JSON path dictionary into path tree entries.

    Args:
        raw: Mapping of segment to a string or a nested mapping.

    Returns:
        Mapping of segment to PathLeaf or PathNode.

    Raises:
        TypeError: If a value is neither a string nor a mapping.
    """
    tree: dict[str, PathEntry] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            tree[key] = PathLeaf(value)
        elif isinstance(value, Mapping):
            index = value.get(INDEX_KEY)
            if not isinstance(index, str):
                index = None
            children = {
                k: v for k, v in value.items() if not (k == INDEX_KEY and isinstance(v, str))
            }
            tree[key] = PathNode(index=index, children=build_path_tree(children))
        else:
            raise TypeError(
                f"Path entry {key!r} must be a string or a mapping, got {type(value).__name__}"
            )
    return tree


def identity_mapping(tokens: Iterable[str]) -> dict[str, str]:
    """Map every token to itself, in sorted order."""
    return {token: token for token in sorted(tokens)}


@dataclass
class TokenSet:
    """Translatable path segments and texts found in a source tree."""

    paths: set[str] = field(default_factory=set)
    texts: set[str] = field(default_factory=set)

    def update(self, other: TokenSet) -> None:
        """Merge another token set into this one."""
        self.paths |= other.paths
        self.texts |= other.texts

    def sorted_paths(self) -> list[str]:
        return sorted(self.paths)

    def sorted_texts(self) -> list[str]:
        return sorted(self.texts)

    def __len__(self) -> int:
        return len(self.paths) + len(self.texts)


class LocaleDescriptor(BaseModel):
    """A configured locale before any dictionary is attached."""

    code: str = Field(min_length=1)
    name: str = Field(min_length=1)


class Locale(BaseModel):
    """Per-language dictionary bundle, persisted as `<code>.json`."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1)
    name: str
    paths: dict[str, Any] = Field(default_factory=dict)
    texts: dict[str, str] = Field(default_factory=dict)

    @field_validator("paths")
    @classmethod
    def check_paths(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Reject anything that is not a string or a nested mapping of strings."""
        try:
            build_path_tree(v)
        except TypeError as e:
            raise ValueError(str(e)) from e
        return v

    @classmethod
    def identity(cls, descriptor: LocaleDescriptor, tokens: TokenSet) -> Locale:
        """Build the untranslated record for a locale."""
        return cls(
            code=descriptor.code,
            name=descriptor.name,
            paths=identity_mapping(tokens.paths),
            texts=identity_mapping(tokens.texts),
        )

    @cached_property
    def path_tree(self) -> dict[str, PathEntry]:
        """Path dictionary as PathLeaf/PathNode entries."""
        return build_path_tree(self.paths)

    def to_json(self) -> str:
        """Serialize with two-space indentation."""
        return self.model_dump_json(indent=2)
