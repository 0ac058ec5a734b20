"""Validation result values shared by the schema and referential validators."""

from __future__ import annotations

from pydantic import BaseModel, Field

MISSING_COMPONENT_TEMPLATE = "Object {object_id} references non-existent component: {component_id}"


class ValidationIssue(BaseModel):
    location: str = ""  # "/blocks/0/type"; "" is the document root
    message: str

    def __str__(self) -> str:
        return f"{self.location} {self.message}".strip()


class MissingReference(BaseModel):
    """A scene object pointing at a component id absent from the catalog."""

    object_id: str
    component_id: str
    block_id: str = ""
    location: str = ""

    @property
    def message(self) -> str:
        return MISSING_COMPONENT_TEMPLATE.format(
            object_id=self.object_id, component_id=self.component_id
        )

    def to_issue(self) -> ValidationIssue:
        return ValidationIssue(location=self.location, message=self.message)


class ValidationResult(BaseModel):
    valid: bool
    errors: list[ValidationIssue] | None = None
    missing: list[MissingReference] = Field(default_factory=list)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(
        cls,
        errors: list[ValidationIssue],
        missing: list[MissingReference] | None = None,
    ) -> "ValidationResult":
        return cls(valid=False, errors=errors, missing=missing or [])

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors or []]

    @property
    def missing_component_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for ref in self.missing:
            seen.setdefault(ref.component_id, None)
        return list(seen)
