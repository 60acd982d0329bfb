"""Element-to-map extraction shared by root and field metadata.

Both the PARAMDEF root and each ``Field`` element store their metadata as
immediate children whose tag is the key and whose direct text is the
value.  :func:`collect_children` turns one element into that map;
:func:`require` and :func:`optional` then read typed values out of it.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import TypeVar
from xml.etree.ElementTree import Element

from paramdex.domain.errors import XmlStructureError, XmlValueError

_T = TypeVar("_T")

DEF_ATTRIBUTE = "Def"


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an ElementTree tag.

    Examples:
        >>> local_name("{urn:x}Field")
        'Field'
        >>> local_name("Field")
        'Field'
    """
    return tag.rsplit("}", 1)[-1]


def collect_children(
    element: Element,
    *,
    required: bool,
    skip: Collection[str] = (),
) -> dict[str, str]:
    """Map each immediate child's local tag name to its direct text.

    Args:
        element: The parent element.
        required: When True, a child with no text raises
            :class:`XmlStructureError`.  When False, such children are
            left out of the map.
        skip: Tag names to ignore entirely (e.g. the ``Fields`` container).
    """
    values: dict[str, str] = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue
        name = local_name(child.tag)
        if name in skip:
            continue
        if child.text is None:
            if required:
                raise XmlStructureError("blank element", name)
            continue
        values[name] = child.text
    return values


def field_def_text(field: Element) -> str:
    """Return the ``Def`` attribute of a ``Field`` element."""
    text = field.get(DEF_ATTRIBUTE)
    if text is None:
        raise XmlStructureError("missing required field", "Field Def")
    return text


def require(values: dict[str, str], key: str, parse: Callable[[str], _T]) -> _T:
    """Read and parse a required key, raising a typed error on failure."""
    raw = values.get(key)
    if raw is None:
        raise XmlStructureError("missing required field", key)
    return _convert(key, raw, parse)


def optional(values: dict[str, str], key: str, parse: Callable[[str], _T]) -> _T | None:
    """Read and parse a key that may be absent.  Absence yields None."""
    raw = values.get(key)
    if raw is None:
        return None
    return _convert(key, raw, parse)


def _convert(key: str, raw: str, parse: Callable[[str], _T]) -> _T:
    try:
        return parse(raw)
    except ValueError as exc:
        raise XmlValueError(key, raw, exc) from exc
