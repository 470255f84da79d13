from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass
class RollupResult:
    key: Tuple
    ok: bool
    score: Optional[Any] = None
    error: Optional[str] = None

    def as_dict(self):
        data = {"key": self.key.as_filter(), "ok": self.ok}
        if self.score is not None:
            data["score"] = self.score._asdict()
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class RollupReport:
    """Outcome of a batch rollup: one result per student, plus skipped/failed blueprints."""

    results: List[RollupResult] = field(default_factory=list)
    skipped_blueprints: List[Tuple[int, int]] = field(default_factory=list)
    failed_blueprints: List[Tuple[int, int]] = field(default_factory=list)

    def add(self, result):
        self.results.append(result)

    def merge(self, other):
        self.results.extend(other.results)
        self.skipped_blueprints.extend(other.skipped_blueprints)
        self.failed_blueprints.extend(other.failed_blueprints)

    @property
    def succeeded(self):
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self):
        return sum(1 for r in self.results if not r.ok)

    @property
    def ok(self):
        return self.failed == 0 and not self.failed_blueprints

    def summary(self):
        return (
            f"{self.succeeded} updated, {self.failed} failed, "
            f"{len(self.skipped_blueprints)} blueprints skipped, "
            f"{len(self.failed_blueprints)} blueprints failed"
        )

    def as_dict(self):
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped_blueprints": [list(pair) for pair in self.skipped_blueprints],
            "failed_blueprints": [list(pair) for pair in self.failed_blueprints],
            "results": [r.as_dict() for r in self.results],
        }
