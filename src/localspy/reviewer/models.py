"""Data models for code review results."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from localspy.config_io import OutputFormat


class Severity(str, Enum):
    """Severity level of a finding."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position in the total order low < medium < high."""
        return _SEVERITY_RANK[self]


class SeverityThreshold(str, Enum):
    """Minimum severity kept in a report. ``all`` keeps everything."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ALL = "all"

    @property
    def rank(self) -> int:
        """Lowest severity rank that passes this threshold."""
        if self is SeverityThreshold.ALL:
            return 0
        return Severity(self.value).rank


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
}


class FindingCategory(str, Enum):
    """Category of a finding."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    BUGS = "bugs"
    STYLE = "style"
    MAINTAINABILITY = "maintainability"
    COMPLEXITY = "complexity"


class SourceFile(BaseModel):
    """A file selected for review."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Absolute path to the file")
    content: str = Field(description="Full text content")
    language: str = Field(description="Language tag inferred from the extension")
    size: int = Field(description="Size in bytes")


class Finding(BaseModel):
    """A single issue reported for a file.

    The backend writes the category under the ``type`` key, so that is the
    serialized name; ``category`` is accepted on input as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    category: FindingCategory = Field(alias="type", description="Finding category")
    severity: Severity = Field(description="Finding severity")
    title: str = Field(description="Brief title of the issue")
    description: str = Field(description="Detailed description of the issue")
    file: str = Field(description="File where the issue was found")
    line: int | None = Field(default=None, description="Line number")
    column: int | None = Field(default=None, description="Column number")
    suggestion: str | None = Field(default=None, description="Suggested fix")
    code: str | None = Field(default=None, description="Offending code excerpt")

    @field_validator("category", "severity", mode="before")
    @classmethod
    def _normalize_enum_value(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def location(self) -> str:
        """Get a human-readable location string."""
        if self.line:
            if self.column:
                return f"{self.file}:{self.line}:{self.column}"
            return f"{self.file}:{self.line}"
        return self.file


class BackendReply(BaseModel):
    """Structured result of one file review call."""

    model_config = ConfigDict(frozen=True)

    issues: list[Finding] = Field(default_factory=list)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class Diagnostic(BaseModel):
    """A recovered per-file problem (unreadable file, failed backend call)."""

    model_config = ConfigDict(frozen=True)

    path: str
    stage: Literal["scan", "review"]
    message: str


class FileReview(BaseModel):
    """Outcome of reviewing a single file."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(description="Path to the reviewed file")
    issues: list[Finding] = Field(default_factory=list, description="Findings for this file")
    confidence: float | None = Field(
        default=None, description="Backend confidence, None if the call failed"
    )
    diagnostic: Diagnostic | None = Field(
        default=None, description="Why the file produced no findings, if it failed"
    )

    @property
    def issue_count(self) -> int:
        """Get total number of issues."""
        return len(self.issues)


class ScanResult(BaseModel):
    """Files selected for review plus the ones that had to be skipped."""

    model_config = ConfigDict(frozen=True)

    files: list[SourceFile] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ReviewSummary(BaseModel):
    """Counts derived from the final list of findings.

    Severities and categories with no findings are absent from the mappings.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_files: int = 0
    total_issues: int = 0
    issues_by_severity: dict[Severity, int] = Field(default_factory=dict)
    issues_by_type: dict[FindingCategory, int] = Field(default_factory=dict)


class ReviewResult(BaseModel):
    """Complete results of a review run."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    summary: ReviewSummary
    issues: list[Finding] = Field(default_factory=list)
    execution_time: float = Field(default=0.0, description="Wall-clock seconds")
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    model: str | None = Field(default=None, description="Model used for the review")

    def issues_with_severity(self, severity: Severity) -> list[Finding]:
        """Get all issues of one severity, in report order."""
        return [i for i in self.issues if i.severity == severity]

    def to_json_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return self.model_dump(mode="json", by_alias=True)


class ReviewConfig(BaseModel):
    """Review configuration, loaded once per run and never mutated.

    Keys may be written in snake_case or camelCase (``max_tokens`` or
    ``maxTokens``).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    model: str = Field(min_length=1, description="Ollama model identifier")
    temperature: float = Field(ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(gt=0, description="Maximum tokens to generate per file")
    include_patterns: tuple[str, ...] = Field(description="Glob patterns of files to review")
    exclude_patterns: tuple[str, ...] = Field(description="Glob patterns of files to skip")
    review_types: tuple[FindingCategory, ...] = Field(
        min_length=1, description="Finding categories to ask for"
    )
    output_format: OutputFormat = Field(description="Report encoding")
    severity: SeverityThreshold = Field(description="Minimum severity to report")

    @field_validator("review_types", mode="after")
    @classmethod
    def _dedupe_review_types(
        cls, value: tuple[FindingCategory, ...]
    ) -> tuple[FindingCategory, ...]:
        return tuple(dict.fromkeys(value))

    @classmethod
    def default(cls) -> "ReviewConfig":
        """Configuration used when no config file is found."""
        return cls(
            model="codellama:7b",
            temperature=0.1,
            max_tokens=2000,
            include_patterns=("**/*.{js,ts,jsx,tsx,py,java}",),
            exclude_patterns=("**/node_modules/**", "**/dist/**"),
            review_types=(
                FindingCategory.SECURITY,
                FindingCategory.PERFORMANCE,
                FindingCategory.BUGS,
            ),
            output_format="console",
            severity=SeverityThreshold.MEDIUM,
        )

    def with_overrides(self, **overrides: Any) -> "ReviewConfig":
        """Return a validated copy with some fields replaced. None values are ignored."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return ReviewConfig.model_validate({**self.model_dump(), **updates})

    def to_file_dict(self) -> dict[str, Any]:
        """Convert to the plain dict written by ``localspy init``."""
        return self.model_dump(mode="json")
