"""CheckService: batch parsing of a Paramdex corpus.

Every PARAMDEF file under a root directory is parsed on its own.  A failure
is recorded as an issue naming the file (and, for field errors, the
offending definition line) and never stops sibling documents unless
``fail_fast`` is set.
"""

from __future__ import annotations

import fnmatch
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from paramdex.domain.errors import ParamdefError
from paramdex.domain.paramdef import deserialize_def
from paramdex.domain.registry import Paramdex
from paramdex.domain.types import ParamDef
from paramdex.services.base import BaseService
from paramdex.services.result import ServiceError, ServiceResult
from paramdex.services.telemetry import get_current_span, trace_span, traced

logger = structlog.get_logger(__name__)

SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class DocumentOutcome:
    """Result of parsing one document: a definition or an error, never both."""

    path: Path
    paramdef: ParamDef | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.paramdef is not None


class CheckService(BaseService):
    """Parses every document of a corpus and reports failures."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        root: str | Path = ".",
        *,
        pattern: str | None = None,
        workers: int | None = None,
        fail_fast: bool | None = None,
    ) -> ServiceResult:
        """Parse every matching document under *root* and list the failures."""
        root_path = self._settings.resolve(root)
        if not root_path.is_dir():
            return self._missing_root("check", root_path)

        outcomes = self.parse_corpus(
            root_path, pattern=pattern, workers=workers, fail_fast=fail_fast
        )
        issues = [_issue(root_path, o) for o in outcomes if o.error is not None]
        by_code = Counter(issue["code"] for issue in issues)
        parsed = [o for o in outcomes if o.paramdef is not None]

        span = get_current_span()
        if span is not None:
            span.annotate("documents", len(outcomes))

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "root": str(root_path),
                "documents": len(outcomes),
                "parsed": len(parsed),
                "fields": sum(len(o.paramdef.fields) for o in parsed if o.paramdef),
                "issues": issues,
                "count": len(issues),
                "by_code": dict(sorted(by_code.items())),
                "healthy": not issues,
            },
        )

    @traced
    def load(
        self,
        root: str | Path = ".",
        *,
        pattern: str | None = None,
        workers: int | None = None,
    ) -> ServiceResult:
        """Build a registry from *root* and summarise its definitions.

        Documents that fail to parse are skipped with a warning.
        """
        root_path = self._settings.resolve(root)
        if not root_path.is_dir():
            return self._missing_root("load", root_path)

        paramdex, warnings = self.load_registry(root_path, pattern=pattern, workers=workers)
        items = [
            {
                "param_type": paramdef.param_type,
                "data_version": paramdef.data_version,
                "format_version": paramdef.format_version,
                "field_count": len(paramdef.fields),
            }
            for paramdef in sorted(paramdex.definitions(), key=lambda d: d.param_type)
        ]
        return ServiceResult(
            ok=True,
            op="load",
            data={"root": str(root_path), "items": items, "count": len(items)},
            warnings=warnings,
        )

    def load_registry(
        self,
        root: Path,
        *,
        pattern: str | None = None,
        workers: int | None = None,
    ) -> tuple[Paramdex, list[str]]:
        """Parse *root* into a :class:`Paramdex`, returning skip warnings."""
        paramdex = Paramdex.empty()
        warnings: list[str] = []
        for outcome in self.parse_corpus(root, pattern=pattern, workers=workers, fail_fast=False):
            rel = _relative(root, outcome.path)
            if outcome.paramdef is None:
                msg = outcome.error.message if outcome.error else "unknown error"
                warnings.append(f"Skipped {rel}: {msg}")
                continue
            if paramdex.insert(outcome.paramdef) is not None:
                warnings.append(
                    f"Duplicate param type {outcome.paramdef.param_type} in {rel} "
                    "replaces an earlier definition"
                )
        return paramdex, warnings

    def parse_corpus(
        self,
        root: Path,
        *,
        pattern: str | None = None,
        workers: int | None = None,
        fail_fast: bool | None = None,
    ) -> list[DocumentOutcome]:
        """Parse each discovered document independently, in path order."""
        corpus = self._settings.corpus
        workers = workers or corpus.workers
        fail_fast = corpus.fail_fast if fail_fast is None else fail_fast

        with trace_span("discover"):
            paths = self.discover(root, pattern=pattern)
        logger.debug("corpus.discovered", root=str(root), documents=len(paths))

        with trace_span("parse"):
            if fail_fast:
                outcomes: list[DocumentOutcome] = []
                for path in paths:
                    outcome = parse_document(path)
                    outcomes.append(outcome)
                    if not outcome.ok:
                        break
                return outcomes
            if workers > 1 and len(paths) > 1:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    return list(executor.map(parse_document, paths))
            return [parse_document(path) for path in paths]

    def discover(self, root: Path, *, pattern: str | None = None) -> list[Path]:
        """List documents under *root* matching the corpus glob, minus excludes."""
        corpus = self._settings.corpus
        glob = pattern or corpus.pattern
        found: list[Path] = []
        for path in sorted(root.glob(glob)):
            if not path.is_file():
                continue
            rel = _relative(root, path)
            if any(fnmatch.fnmatch(rel, ex) for ex in corpus.exclude):
                continue
            found.append(path)
        return found

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _missing_root(op: str, root: Path) -> ServiceResult:
        return ServiceResult.failure(
            op,
            ServiceError(
                code="NOT_FOUND",
                message=f"Corpus root is not a directory: {root}",
                detail={"root": str(root)},
            ),
        )


def parse_document(path: Path) -> DocumentOutcome:
    """Parse one file into a DocumentOutcome.  Never raises for parse errors."""
    try:
        paramdef = deserialize_def(BaseService._read_document(path))
    except ParamdefError as exc:
        logger.info("document.failed", path=str(path), code=exc.code, error=exc.message)
        return DocumentOutcome(path=path, error=ServiceError.from_exception(exc))
    except OSError as exc:
        logger.warning("document.unreadable", path=str(path), error=str(exc))
        return DocumentOutcome(
            path=path,
            error=ServiceError(code="ERR_IO", message=str(exc), detail={}),
        )
    return DocumentOutcome(path=path, paramdef=paramdef)


def _issue(root: Path, outcome: DocumentOutcome) -> dict[str, Any]:
    error = outcome.error
    assert error is not None
    issue: dict[str, Any] = {
        "path": _relative(root, outcome.path),
        "severity": SEVERITY_ERROR,
        "code": error.code,
        "message": error.message,
    }
    for key in ("line", "field_index", "cause", "span", "key"):
        if key in error.detail:
            issue[key] = error.detail[key]
    return issue


def _relative(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
