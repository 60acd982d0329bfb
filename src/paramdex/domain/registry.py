"""Paramdex registry: param type key to ParamDef."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from paramdex.domain.paramdef import deserialize_def
from paramdex.domain.types import ParamDef


class Paramdex:
    """A simple mapping from param type to :class:`ParamDef`.

    Inserting a definition whose key is already present replaces the old
    one (last insert wins).
    """

    def __init__(self, definitions: dict[str, ParamDef] | None = None) -> None:
        self._definitions: dict[str, ParamDef] = dict(definitions or {})

    @classmethod
    def empty(cls) -> Paramdex:
        return cls()

    @classmethod
    def deserialize_all(cls, documents: Iterable[str | bytes]) -> Paramdex:
        """Deserialize every document, stopping at the first failure."""
        paramdex = cls()
        for text in documents:
            paramdex.insert(deserialize_def(text))
        return paramdex

    def insert(self, paramdef: ParamDef) -> ParamDef | None:
        """Register *paramdef*; return the definition it replaced, if any."""
        previous = self._definitions.get(paramdef.param_type)
        self._definitions[paramdef.param_type] = paramdef
        return previous

    def get(self, param_type: str) -> ParamDef | None:
        return self._definitions.get(param_type)

    def definitions(self) -> list[ParamDef]:
        return list(self._definitions.values())

    def __contains__(self, param_type: object) -> bool:
        return param_type in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)
