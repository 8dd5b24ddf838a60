# leansim/core/errors.py
# -----------------------------------------------------------------------------
# The one error the engine raises: caller-supplied inputs broke the contract
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError


@dataclass(frozen=True, slots=True)
class FieldIssue:
    field: str
    message: str


class InvalidInputError(ValueError):
    """Raised before any computation when an input field is missing or invalid."""

    def __init__(self, issues: list[FieldIssue]):
        self.issues = list(issues)
        detail = "; ".join(f"{i.field}: {i.message}" for i in self.issues)
        super().__init__(f"invalid financial inputs ({detail})")

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidInputError":
        issues = [
            FieldIssue(
                field=".".join(str(p) for p in err["loc"]) or "inputs",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        return cls(issues)

    def by_field(self) -> dict[str, list[str]]:
        out: dict[str, list[str]] = {}
        for issue in self.issues:
            out.setdefault(issue.field, []).append(issue.message)
        return out
