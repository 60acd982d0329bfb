"""Field types and definition models.

A field type is a tagged union keyed on ``kind``.  Payloads live on the
variants that need them: unsigned integers carry an optional bit size,
fixed strings a character count, padding an optional byte or bit length.

All models use Pydantic with frozen config for immutability.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

MAX_BIT_SIZE = 0xFF
MAX_LENGTH = 2**64 - 1


class FieldKind(StrEnum):
    """Every field type keyword the definition grammar produces."""

    S8 = "s8"
    U8 = "u8"
    S16 = "s16"
    U16 = "u16"
    S32 = "s32"
    U32 = "u32"
    B32 = "b32"
    F32 = "f32"
    A32 = "a32"
    F64 = "f64"
    FIXSTR = "fixstr"
    FIXSTRW = "fixstrW"
    DUMMY8 = "dummy8"


class Endian(StrEnum):
    """Byte order of the param data described by a definition."""

    LITTLE = "little"
    BIG = "big"

    @classmethod
    def from_flag(cls, big_endian: bool) -> Endian:
        return cls.BIG if big_endian else cls.LITTLE


class StringFormat(StrEnum):
    """Text encoding used for strings in the described param data."""

    UTF16 = "utf16"
    SHIFT_JIS = "shift_jis"

    @classmethod
    def from_flag(cls, unicode: bool) -> StringFormat:
        return cls.UTF16 if unicode else cls.SHIFT_JIS


# --- Field type variants ---


class _FieldTypeBase(BaseModel):
    model_config = {"frozen": True}

    def supports_bit_size(self) -> bool:
        """Whether a ``:N`` suffix is allowed on this type."""
        return False


class SimpleType(_FieldTypeBase):
    """Fixed-width numeric type with no payload.

    ``a32`` is an angle stored as a single-precision float.
    """

    kind: Literal["s8", "s16", "s32", "b32", "f32", "a32", "f64"]


class UnsignedType(_FieldTypeBase):
    """Unsigned integer, optionally narrowed to *bit_size* bits."""

    kind: Literal["u8", "u16", "u32"]
    bit_size: int | None = Field(default=None, ge=0, le=MAX_BIT_SIZE)

    def supports_bit_size(self) -> bool:
        return True


class FixStrType(_FieldTypeBase):
    """Fixed-length string: ``fixstr`` is Shift-JIS, ``fixstrW`` is UTF-16."""

    kind: Literal["fixstr", "fixstrW"]
    length: int = Field(ge=0, le=MAX_LENGTH)

    @property
    def wide(self) -> bool:
        return self.kind == FieldKind.FIXSTRW


class PadBytes(BaseModel):
    """Padding measured in whole bytes."""

    model_config = {"frozen": True}

    unit: Literal["bytes"] = "bytes"
    count: int = Field(ge=0, le=MAX_LENGTH)


class PadBits(BaseModel):
    """Padding measured in bits."""

    model_config = {"frozen": True}

    unit: Literal["bits"] = "bits"
    count: int = Field(ge=0, le=MAX_BIT_SIZE)


PadLength = Annotated[PadBytes | PadBits, Field(discriminator="unit")]


class DummyType(_FieldTypeBase):
    """Unused bytes or bits.  No length means a single byte."""

    kind: Literal["dummy8"] = "dummy8"
    length: PadLength | None = None


FieldType = Annotated[
    SimpleType | UnsignedType | FixStrType | DummyType,
    Field(discriminator="kind"),
]


# --- Definitions ---


class FieldDef(BaseModel):
    """One parsed field definition line."""

    model_config = {"frozen": True}

    field_type: FieldType
    name: str
    default_value: float | None = None

    @property
    def kind(self) -> FieldKind:
        return FieldKind(self.field_type.kind)

    @classmethod
    def parse(cls, line: str) -> FieldDef:
        """Parse a definition line such as ``u32 flags:3 = 0``."""
        from paramdex.domain.field_def import parse_field_def

        return parse_field_def(line)


class EditFlags(BaseModel):
    """Editor input behaviour flags."""

    model_config = {"frozen": True}

    wrap: bool = False
    lock: bool = False

    @classmethod
    def from_text(cls, text: str) -> EditFlags:
        return cls(wrap="Wrap" in text, lock="Lock" in text)


class FieldMeta(BaseModel):
    """Editor metadata attached to a field.  Every entry is optional."""

    model_config = {"frozen": True}

    display_name: str | None = None
    enum: str | None = None
    description: str | None = None
    display_format: str | None = None
    edit_flags: EditFlags | None = None
    minimum: float | None = None
    maximum: float | None = None
    increment: float | None = None
    sort_id: int | None = None


class ParamField(BaseModel):
    """A field definition paired with its editor metadata."""

    model_config = {"frozen": True}

    definition: FieldDef
    meta: FieldMeta = Field(default_factory=FieldMeta)


class ParamDef(BaseModel):
    """A complete parameter type definition.

    ``fields`` is in binary layout order.
    """

    model_config = {"frozen": True}

    param_type: str
    data_version: int = Field(ge=0, le=0xFFFFFFFF)
    endian: Endian
    string_format: StringFormat
    format_version: int = Field(ge=0, le=0xFFFFFFFF)
    fields: tuple[ParamField, ...] = ()

    @classmethod
    def from_xml(cls, text: str | bytes) -> ParamDef:
        """Deserialize a PARAMDEF XML document."""
        from paramdex.domain.paramdef import deserialize_def

        return deserialize_def(text)

    def field_names(self) -> list[str]:
        return [f.definition.name for f in self.fields]
