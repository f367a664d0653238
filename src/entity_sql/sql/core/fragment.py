"""
Immutable SQL text with its ordered bound values.
"""

from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

PLACEHOLDER = "?"


@dataclass(frozen=True)
class SqlFragment:
    """
    A piece of SQL text and the values for its ``?`` placeholders.

    The i-th placeholder in ``text``, read left to right, binds to
    ``parameters[i]``. Concatenating fragments keeps that alignment.

    Example:
        >>> head = SqlFragment("UPDATE `t_user` SET `name`=?", ("alice",))
        >>> head + SqlFragment(" WHERE `id`=?", (1,))
        SqlFragment(text='UPDATE `t_user` SET `name`=? WHERE `id`=?', parameters=('alice', 1))
    """

    text: str = ""
    parameters: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def __add__(self, other: Union["SqlFragment", str]) -> "SqlFragment":
        if isinstance(other, str):
            return SqlFragment(self.text + other, self.parameters)
        if not isinstance(other, SqlFragment):
            return NotImplemented
        return SqlFragment(self.text + other.text, self.parameters + other.parameters)

    def __str__(self) -> str:
        return self.text

    @classmethod
    def empty(cls) -> "SqlFragment":
        return cls()

    @property
    def placeholder_count(self) -> int:
        """Number of ``?`` placeholders in the text."""
        return self.text.count(PLACEHOLDER)

    def bind(self) -> Tuple[str, List[Any]]:
        """Text and a fresh parameter list, ready for a DB-API ``execute``."""
        return self.text, list(self.parameters)


class NothingToUpdate:
    """
    Sentinel returned when an update would set no columns.

    Falsy and distinct from every :class:`SqlFragment`; callers skip
    execution when they receive it.
    """

    _instance = None

    def __new__(cls) -> "NothingToUpdate":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOTHING_TO_UPDATE"


NOTHING_TO_UPDATE = NothingToUpdate()
