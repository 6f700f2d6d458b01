"""Resolution of the bundle and document roots used by the path helpers."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..config.constants import BUNDLE_ROOT_ENV, DOCUMENT_ROOT_ENV, DOCUMENTS_DIRNAME
from .base import ToolkitError

if TYPE_CHECKING:
    from ..config import ToolkitConfig

LOG = logging.getLogger(__name__)

BUNDLE = "bundle"
DOCUMENT = "document"


class PathResolutionError(ToolkitError):
    """A named root directory could not be resolved."""

    def __init__(self, message: str, *, root: str, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.root = root


@dataclass(frozen=True)
class PathRoots:
    """Configured roots. A None entry is resolved from the environment."""

    bundle_root: Path | None = None
    document_root: Path | None = None

    @classmethod
    def from_config(cls, config: ToolkitConfig | None = None) -> PathRoots:
        """Build roots from the paths section of the configuration."""
        if config is None:
            from ..config import get_config

            config = get_config()
        return cls(bundle_root=config.paths.bundle_root, document_root=config.paths.document_root)


def _require_directory(candidate: Path, root: str) -> Path:
    if not candidate.is_dir():
        msg = f"{root.capitalize()} root is not an existing directory: {candidate}"
        raise PathResolutionError(msg, root=root)
    return candidate.absolute()


def _default_bundle_root() -> Path | None:
    """Directory holding the running application's resources."""
    frozen_root = getattr(sys, "_MEIPASS", None)
    if frozen_root:
        return Path(frozen_root)
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return None


def resolve_bundle_root(roots: PathRoots | None = None) -> Path:
    """Resolve the read-only resource root."""
    roots = roots if roots is not None else PathRoots.from_config()

    candidate = roots.bundle_root
    if candidate is None and os.environ.get(BUNDLE_ROOT_ENV):
        candidate = Path(os.environ[BUNDLE_ROOT_ENV])
    if candidate is None:
        candidate = _default_bundle_root()
    if candidate is None:
        msg = "Cannot determine the bundle root: not configured and no running script"
        raise PathResolutionError(msg, root=BUNDLE)

    LOG.debug("Bundle root: %s", candidate)
    return _require_directory(candidate, BUNDLE)


def resolve_document_root(roots: PathRoots | None = None) -> Path:
    """Resolve the user-writable document root."""
    roots = roots if roots is not None else PathRoots.from_config()

    candidate = roots.document_root
    if candidate is None and os.environ.get(DOCUMENT_ROOT_ENV):
        candidate = Path(os.environ[DOCUMENT_ROOT_ENV])
    if candidate is None:
        try:
            candidate = Path.home() / DOCUMENTS_DIRNAME
        except RuntimeError as e:
            msg = "Cannot determine the document root: home directory is unknown"
            raise PathResolutionError(msg, root=DOCUMENT, cause=e) from e

    LOG.debug("Document root: %s", candidate)
    return _require_directory(candidate, DOCUMENT)


def _join(root: Path, file_name: str) -> str:
    """Append file_name under root, even when it starts with a separator."""
    return str(root / file_name.lstrip("/\\"))


def bundle_path(file_name: str, roots: PathRoots | None = None) -> str:
    """Join file_name onto the bundle root."""
    return _join(resolve_bundle_root(roots), file_name)


def document_path(file_name: str, roots: PathRoots | None = None) -> str:
    """Join file_name onto the document root."""
    return _join(resolve_document_root(roots), file_name)
