from itertools import islice
from typing import Callable, Hashable, Iterable, Iterator, Mapping, TypeVar

from finsight.domain import Transaction

K = TypeVar('K', bound=Hashable)


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def iter_ranked(totals: Mapping[K, float]) -> Iterator[tuple[K, float]]:
    # sorted() is stable, so equal totals keep insertion order
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    yield from ordered


def top_n(totals: Mapping[K, float], n: int) -> list[tuple[K, float]]:
    return list(islice(iter_ranked(totals), max(0, n)))
