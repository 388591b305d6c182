"""Base model for immutable EPUB entities with structural equality."""

from collections.abc import Mapping, Set
from typing import Any

from pydantic import BaseModel, ConfigDict


TEXT_DIRECTIONS = frozenset({"ltr", "rtl", "auto"})


def freeze(value: Any) -> Any:
    """Convert a field value into a hashable equivalent.

    Sequences keep their order, mappings and sets become frozensets so that
    their hash does not depend on insertion order (they compare that way too).
    """
    if isinstance(value, Mapping):
        return frozenset((key, freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set):
        return frozenset(freeze(item) for item in value)
    return value


class EpubModel(BaseModel):
    """Immutable value object.

    Two models are equal when they have the same class and every declared
    field compares equal. Private attributes (archive handles and the like)
    never take part in equality or hashing.
    """

    model_config = ConfigDict(frozen=True)

    def _identity(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__qualname__, *(freeze(value) for value in self._identity())))


class LanguageRelatedAttributes(EpubModel):
    """``xml:lang`` and ``dir`` as found in the document.

    Values are kept verbatim, including unknown directions. Reading systems
    assume ``auto`` when ``dir`` is absent or invalid, see ``effective_dir``.
    """

    lang: str | None = None
    dir: str | None = None

    @property
    def effective_dir(self) -> str:
        if self.dir is not None and self.dir.strip().lower() in TEXT_DIRECTIONS:
            return self.dir.strip().lower()
        return "auto"
