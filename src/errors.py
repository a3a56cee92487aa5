"""Exceptions and structured activation reporting."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CmsError(Exception):
    """Base class for every error raised by portfolio_cms."""


class SchemaError(CmsError):
    """A schema declaration is invalid."""


class SchemaConflictError(SchemaError):
    """A key was re-declared with a different definition."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} '{key}' is already declared with a different definition")
        self.kind = kind
        self.key = key


class UnknownFieldError(CmsError):
    """A field name is not part of the registered field set."""

    def __init__(self, name: str, object_type: str = "") -> None:
        where = f" on '{object_type}'" if object_type else ""
        super().__init__(f"Unknown field '{name}'{where}")
        self.name = name
        self.object_type = object_type


class NotFoundError(CmsError):
    """A requested user, content type or content item does not exist."""

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"No {kind} found for {identifier!r}")
        self.kind = kind
        self.identifier = identifier


class ActivationIssue(BaseModel):
    """A single problem captured while activating."""

    step: str
    error_type: str = "unknown"
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ActivationReport(BaseModel):
    """Summary of one activation run.

    Issues never abort activation; they are recorded so the caller can
    surface them.
    """

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None
    steps_completed: list[str] = Field(default_factory=list)
    issues: list[ActivationIssue] = Field(default_factory=list)

    def add_issue(self, step: str, message: str, *, error_type: str = "unknown") -> None:
        """Record a problem for a step."""
        self.issues.append(ActivationIssue(step=step, error_type=error_type, message=message))

    def mark_step_complete(self, step: str) -> None:
        """Record that a step completed."""
        if step not in self.steps_completed:
            self.steps_completed.append(step)

    def finish(self) -> None:
        self.finished_at = datetime.now()

    @property
    def success(self) -> bool:
        return not self.issues

    def summary_text(self) -> str:
        """Human-readable summary of the activation run."""
        status = "completed" if self.success else "completed with issues"
        lines = [f"Activation {status}"]
        if self.steps_completed:
            lines.append(f"Steps: {', '.join(self.steps_completed)}")
        for issue in self.issues:
            lines.append(f"  [{issue.step}] {issue.error_type}: {issue.message}")
        return "\n".join(lines)
