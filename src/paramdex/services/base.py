"""BaseService: shared foundation for paramdex services.

Every service receives the resolved :class:`PdxSettings` at construction
time and reads documents through :meth:`BaseService._read_document`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from paramdex.config.settings import PdxSettings

logger = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self, root: str) -> ServiceResult:
                root_path = self._settings.resolve(root)
                ...
    """

    def __init__(self, settings: PdxSettings) -> None:
        self._settings = settings

    @staticmethod
    def _read_document(path: Path) -> bytes:
        """Read a PARAMDEF file as bytes so the XML declaration picks the encoding."""
        data = path.read_bytes()
        logger.debug("document.read", path=str(path), size=len(data))
        return data
