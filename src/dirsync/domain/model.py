from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator, Set

from . import actions

ContentHash = str


class Snapshot(Mapping):
    """Content-addressed view of a directory tree: hash -> relative name.

    Iteration follows insertion order, which is the order the files were
    discovered in. The mapping is copied on construction and cannot be
    changed afterwards.
    """

    def __init__(self, entries=()):
        self._entries = dict(entries)

    def __getitem__(self, sha: ContentHash) -> str:
        return self._entries[sha]

    def __iter__(self) -> Iterator[ContentHash]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f'Snapshot({self._entries!r})'

    def names(self) -> Set[str]:
        return set(self._entries.values())


def determine_actions(source: Mapping, dest: Mapping) -> Iterator[actions.Action]:
    for sha, filename in source.items():
        if sha not in dest:
            yield actions.Copy(filename, filename)

        elif dest[sha] != filename:
            yield actions.Move(dest[sha], filename)

    for sha, filename in dest.items():
        if sha not in source:
            yield actions.Delete(filename)
