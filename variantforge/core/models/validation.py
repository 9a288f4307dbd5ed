"""Validation models shared by the validator, pipeline and CLI."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    """Rule family an issue belongs to. ERROR kinds map onto exception types."""

    STRUCTURAL = "structural"
    AMBIGUITY = "ambiguity"
    MISSING_FIELD = "missing_field"
    CONFIG_DEPENDENCY = "config_dependency"
    IGNORED_DIRECTIVE = "ignored_directive"


class ValidationIssue(BaseModel):
    """A single diagnostic, located at enum/variant/key granularity."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    kind: DiagnosticKind
    enum_name: str
    variant_name: str | None = None
    key: str | None = Field(
        default=None, description="Directive or role the issue is about"
    )
    message: str
    suggestion: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def location(self) -> str:
        if self.variant_name is None:
            return self.enum_name
        return f"{self.enum_name}::{self.variant_name}"

    @property
    def category(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        key = f" [{self.key}]" if self.key else ""
        return f"{self.location}{key}: {self.message}"


class ValidationResult(BaseModel):
    """Collected issues for one enum (or many, when merged)."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def extend(self, issues: list[ValidationIssue]) -> None:
        self.issues.extend(issues)

    def for_variant(self, variant_name: str) -> list[ValidationIssue]:
        return [i for i in self.issues if i.variant_name == variant_name]
