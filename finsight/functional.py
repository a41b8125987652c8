from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, TypeVar

from finsight.domain import Budget, Transaction, TransactionType

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):
    """Optional value that can be mapped over without None checks."""

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        ...

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        ...

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        ...

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        return Some(f(self._value))

    def bind(self, f: Callable[[T], Maybe[U]]) -> Maybe[U]:
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        return Nothing()

    def bind(self, f: Callable[[T], Maybe[U]]) -> Maybe[U]:
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):
    """Result of a check: Right carries the value, Left carries the error payload."""

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        ...

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        ...

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        ...

    @abstractmethod
    def get_error(self) -> E:
        ...

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> Either[E, U]:
        return Right(f(self._value))

    def bind(self, f: Callable[[T], Either[E, U]]) -> Either[E, U]:
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Right has no error")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> Either[E, U]:
        return Left(self._error)

    def bind(self, f: Callable[[T], Either[E, U]]) -> Either[E, U]:
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_budget(budgets: Iterable[Budget], category: str) -> Maybe[Budget]:
    # category names match case-sensitively
    for b in budgets:
        if b.category == category:
            return Some(b)
    return Nothing()


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:
    if t.type not in tuple(TransactionType):
        return Left({
            "error": "unknown_type",
            "message": f"Transaction {t.id} has unknown type {t.type!r}",
            "transaction_id": t.id,
        })

    if t.amount is not None and t.amount < 0:
        return Left({
            "error": "negative_amount",
            "message": f"Transaction {t.id} carries a negative amount; direction belongs in type",
            "transaction_id": t.id,
            "amount": t.amount,
        })

    return Right(t)
