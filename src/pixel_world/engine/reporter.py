"""Load reports and the top-level error reporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pixel_world.errors import AssetError
from pixel_world.logging_config import get_logger

logger = get_logger("engine.reporter")


@dataclass(frozen=True)
class LoadFailure:
    """One asset or level that failed to load."""

    kind: str
    message: str
    asset: Optional[str] = None
    level: Optional[str] = None

    @classmethod
    def from_error(cls, error: AssetError) -> "LoadFailure":
        return cls(
            kind=type(error).__name__,
            message=error.message,
            asset=error.asset,
            level=error.level,
        )

    def __str__(self) -> str:
        where = [part for part in (self.asset, self.level) if part]
        prefix = f"{' / '.join(where)}: " if where else ""
        return f"{prefix}{self.kind}: {self.message}"


@dataclass
class LoadReport:
    """Outcome of loading one asset: what loaded and what failed."""

    asset: str
    loaded: list[str] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def fail(self, error: AssetError) -> LoadFailure:
        failure = LoadFailure.from_error(error.with_context(asset=self.asset))
        self.failures.append(failure)
        return failure


class ErrorReporter:
    """Collects load reports and logs their failures."""

    def __init__(self):
        self._reports: list[LoadReport] = []

    def report(self, report: LoadReport) -> LoadReport:
        self._reports.append(report)
        for failure in report.failures:
            logger.error("Failed to load %s", failure)
        if report.loaded:
            logger.info("Loaded %s: %s", report.asset, ", ".join(report.loaded))
        return report

    @property
    def reports(self) -> list[LoadReport]:
        return list(self._reports)

    @property
    def failures(self) -> list[LoadFailure]:
        return [failure for report in self._reports for failure in report.failures]

    @property
    def has_failures(self) -> bool:
        return any(not report.ok for report in self._reports)
