"""Batch-level failures of the extraction pipeline.

Only these escape an extraction call; per-strategy and per-element
failures are absorbed and counted instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ifcstruct.models.report import BatchReport


class ModelFileError(Exception):
    """The model file cannot be extracted at all."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class ModelFileNotFoundError(ModelFileError):
    def __init__(self, path: str | Path) -> None:
        super().__init__(path, "File not found")


class UnsupportedFileTypeError(ModelFileError):
    def __init__(self, path: str | Path, allowed: tuple[str, ...]) -> None:
        self.allowed = allowed
        super().__init__(path, f"Wrong file extension (expected one of {', '.join(allowed)})")


class UnreadableModelError(ModelFileError):
    def __init__(self, path: str | Path, detail: str = "") -> None:
        reason = "Unreadable model structure"
        if detail:
            reason = f"{reason} ({detail})"
        super().__init__(path, reason)


class ExtractionCancelled(Exception):
    """The caller's cancellation event was set between two elements."""

    def __init__(self, report: BatchReport) -> None:
        self.report = report
        super().__init__(
            f"Extraction cancelled after {report.attempted} element(s)"
        )


class PlacementDepthExceeded(Exception):
    """A placement chain is longer than the configured cap (likely cyclic)."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Placement chain exceeds {max_depth} links")
