"""Selection commands: which of the found pull requests to open.

A command is a whitespace separated set of tokens. Each token is an author,
a ``repo:number`` key, ``all`` or ``none``. The set is only accepted when
every token is known; a single unknown token rejects the whole command.

``none`` next to other tokens contributes nothing and does not cancel them,
so ``none alice`` opens alice's pull requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .store import PRStore

ALL = "all"
NONE = "none"
LITERALS = (ALL, NONE)


@dataclass(frozen=True)
class Selection:
    tokens: frozenset[str]
    urls: list[str] = field(default_factory=list)
    invalid: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return bool(self.tokens) and not self.invalid


def parse(raw: str) -> frozenset[str]:
    return frozenset(raw.split())


def complete(prefix: str, vocabulary: Iterable[str]) -> list[str]:
    """Vocabulary entries starting with ``prefix``, sorted."""
    return sorted(word for word in vocabulary if word.startswith(prefix))


class SelectionResolver:
    def __init__(self, store: PRStore, configured_authors: Iterable[str]):
        self.store = store
        self.valid_authors = sorted(set(configured_authors) & set(store.authors()))
        self.valid_numbers = store.numbers()

    def vocabulary(self) -> set[str]:
        return set(self.valid_authors) | set(self.valid_numbers) | set(LITERALS)

    def invalid_tokens(self, tokens: Iterable[str]) -> list[str]:
        vocabulary = self.vocabulary()
        return sorted(token for token in tokens if token not in vocabulary)

    def urls_for(self, token: str) -> list[str]:
        if token == ALL:
            return self.store.all_urls()
        if token == NONE:
            return []
        if token in self.valid_authors:
            return self.store.urls_by_author(token)
        return self.store.urls_by_number(token)

    def expand(self, tokens: Iterable[str]) -> list[str]:
        """Union of every token's URLs, first occurrence wins."""
        seen = set()
        urls = []
        for token in sorted(tokens):
            for url in self.urls_for(token):
                if url not in seen:
                    seen.add(url)
                    urls.append(url)
        return urls

    def resolve(self, raw: str) -> Selection:
        tokens = parse(raw)
        invalid = self.invalid_tokens(tokens)
        if not tokens or invalid:
            return Selection(tokens=tokens, invalid=invalid)
        return Selection(tokens=tokens, urls=self.expand(tokens))
