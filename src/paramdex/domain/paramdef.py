"""PARAMDEF document assembler.

Document shape::

    <PARAMDEF XmlVersion="2">
      <ParamType>EQUIP_PARAM_WEAPON_ST</ParamType>
      <DataVersion>1</DataVersion>
      <BigEndian>false</BigEndian>
      <Unicode>true</Unicode>
      <FormatVersion>203</FormatVersion>
      <Fields>
        <Field Def="s32 behaviorVariationId">
          <DisplayName>Behavior Variation ID</DisplayName>
          <Minimum>-1</Minimum>
        </Field>
        ...
      </Fields>
    </PARAMDEF>

INVARIANT: a document either yields a complete ParamDef or raises; fields
are returned in document order, which is the binary layout order.
"""

from __future__ import annotations

import logging
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from paramdex.domain.errors import (
    DefParseError,
    FieldDefinitionError,
    XmlStructureError,
    XmlSyntaxError,
)
from paramdex.domain.field_def import parse_field_def
from paramdex.domain.types import (
    EditFlags,
    Endian,
    FieldMeta,
    ParamDef,
    ParamField,
    StringFormat,
)
from paramdex.domain.values import parse_bool, parse_f64, parse_u32, parse_usize
from paramdex.domain.xml_extract import (
    collect_children,
    field_def_text,
    local_name,
    optional,
    require,
)

logger = logging.getLogger(__name__)

PARAMDEF_ROOT = "PARAMDEF"
FIELDS_ELEMENT = "Fields"

# The string format flag is read from the same element as endianness.
# Upstream readers do this; keep it until the format says otherwise.
STRING_FORMAT_KEY = "BigEndian"


def deserialize_def(text: str | bytes) -> ParamDef:
    """Deserialize one PARAMDEF XML document.

    Raises a :class:`~paramdex.domain.errors.ParamdefError` subclass on the
    first problem found; no partial definition is ever returned.
    """
    try:
        root = ElementTree.fromstring(text)
    except (ElementTree.ParseError, ValueError) as exc:
        raise XmlSyntaxError(str(exc)) from exc

    if local_name(root.tag) != PARAMDEF_ROOT:
        raise XmlStructureError("invalid root element", local_name(root.tag))

    fields_node = _find_fields(root)
    root_config = collect_children(root, required=True, skip=(FIELDS_ELEMENT,))

    param_type = require(root_config, "ParamType", str)
    data_version = require(root_config, "DataVersion", parse_u32)
    endian = Endian.from_flag(require(root_config, "BigEndian", parse_bool))
    string_format = StringFormat.from_flag(require(root_config, STRING_FORMAT_KEY, parse_bool))
    format_version = require(root_config, "FormatVersion", parse_u32)

    fields = tuple(
        parse_field_node(node, index)
        for index, node in enumerate(child for child in fields_node if isinstance(child.tag, str))
    )

    logger.debug("Deserialized %s with %d fields", param_type, len(fields))
    return ParamDef(
        param_type=param_type,
        data_version=data_version,
        endian=endian,
        string_format=string_format,
        format_version=format_version,
        fields=fields,
    )


def parse_field_node(node: Element, index: int = 0) -> ParamField:
    """Build a ParamField from one ``Field`` element."""
    def_text = field_def_text(node)
    try:
        definition = parse_field_def(def_text)
    except DefParseError as exc:
        raise FieldDefinitionError(index, def_text, exc) from exc

    values = collect_children(node, required=False)
    meta = FieldMeta(
        display_name=optional(values, "DisplayName", str),
        enum=optional(values, "Enum", str),
        description=optional(values, "Description", str),
        display_format=optional(values, "DisplayFormat", str),
        edit_flags=optional(values, "EditFlags", EditFlags.from_text),
        minimum=optional(values, "Minimum", parse_f64),
        maximum=optional(values, "Maximum", parse_f64),
        increment=optional(values, "Increment", parse_f64),
        sort_id=optional(values, "SortID", parse_usize),
    )
    return ParamField(definition=definition, meta=meta)


def _find_fields(root: Element) -> Element:
    """Return the last ``Fields`` child of *root*."""
    found: Element | None = None
    for child in root:
        if isinstance(child.tag, str) and local_name(child.tag) == FIELDS_ELEMENT:
            found = child
    if found is None:
        raise XmlStructureError("missing required field", FIELDS_ELEMENT)
    return found
