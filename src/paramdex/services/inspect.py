"""InspectService: parse a single definition line or PARAMDEF document."""

from __future__ import annotations

from typing import Any

import structlog

from paramdex.domain.errors import DefParseError, ParamdefError
from paramdex.domain.field_def import parse_field_def
from paramdex.domain.paramdef import deserialize_def
from paramdex.domain.types import FieldDef, ParamDef, ParamField
from paramdex.services.base import BaseService
from paramdex.services.result import ServiceError, ServiceResult
from paramdex.services.telemetry import trace_span, traced

logger = structlog.get_logger(__name__)


class InspectService(BaseService):
    """Read-only inspection of one line or one document."""

    @traced
    def parse_line(self, line: str) -> ServiceResult:
        """Parse one field definition line."""
        try:
            field_def = parse_field_def(line)
        except DefParseError as exc:
            logger.debug("parse_def.failed", line=line, code=exc.code)
            return ServiceResult.failure("parse_def", ServiceError.from_exception(exc))
        return ServiceResult(ok=True, op="parse_def", data=describe_field_def(field_def, line=line))

    @traced
    def describe(self, path: str) -> ServiceResult:
        """Parse one PARAMDEF file and describe its fields."""
        file_path = self._settings.resolve(path)
        if not file_path.is_file():
            return ServiceResult.failure(
                "show",
                ServiceError(
                    code="NOT_FOUND",
                    message=f"No such file: {file_path}",
                    detail={"path": str(file_path)},
                ),
            )

        try:
            with trace_span("read"):
                raw = self._read_document(file_path)
            with trace_span("deserialize"):
                paramdef = deserialize_def(raw)
        except ParamdefError as exc:
            return ServiceResult.failure(
                "show", ServiceError.from_exception(exc, path=str(file_path))
            )
        except OSError as exc:
            return ServiceResult.failure(
                "show",
                ServiceError(code="ERR_IO", message=str(exc), detail={"path": str(file_path)}),
            )

        data = describe_paramdef(paramdef)
        data["path"] = str(file_path)
        return ServiceResult(ok=True, op="show", data=data)


def describe_field_def(field_def: FieldDef, *, line: str | None = None) -> dict[str, Any]:
    """Flatten a FieldDef into a JSON-ready row."""
    field_type = field_def.field_type
    row: dict[str, Any] = {
        "name": field_def.name,
        "kind": field_type.kind,
        "bit_size": getattr(field_type, "bit_size", None),
        "length": None,
        "length_unit": None,
        "default": field_def.default_value,
    }
    length = getattr(field_type, "length", None)
    if isinstance(length, int):
        row["length"] = length
        row["length_unit"] = "chars"
    elif length is not None:
        row["length"] = length.count
        row["length_unit"] = length.unit
    if line is not None:
        row["line"] = line
    return row


def describe_field(index: int, field: ParamField) -> dict[str, Any]:
    row = describe_field_def(field.definition)
    row["index"] = index
    row.update(field.meta.model_dump(mode="json", exclude_none=True))
    return row


def describe_paramdef(paramdef: ParamDef) -> dict[str, Any]:
    """Flatten a ParamDef into header values plus one row per field."""
    return {
        "param_type": paramdef.param_type,
        "data_version": paramdef.data_version,
        "endian": paramdef.endian.value,
        "string_format": paramdef.string_format.value,
        "format_version": paramdef.format_version,
        "field_count": len(paramdef.fields),
        "fields": [describe_field(i, f) for i, f in enumerate(paramdef.fields)],
    }
