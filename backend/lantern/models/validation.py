"""
Outcome of a verb handler's validate() step.

A handler checks the Command against the live World before touching any
state. It returns a ValidationResult: either the go-ahead (plus whatever it
looked up, so execute() need not look again) or a refusal carrying the
text the dispatcher shows the player.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from lantern.models.event import EventType, RejectionCode, RejectionEvent

# Context values that survive into a RejectionEvent
_EVENT_SAFE_TYPES = (str, int, bool)


class ValidationResult(BaseModel):
    """Go-ahead or refusal for one Command.

    A refusal must name both a code and the player-facing reason.
    """

    valid: bool
    rejection_code: RejectionCode | None = None
    rejection_reason: str | None = None
    context: dict[str, object] = Field(default_factory=dict)
    hint: str | None = None

    @model_validator(mode="after")
    def check_rejection_fields(self) -> "ValidationResult":
        if self.valid:
            return self
        missing = [
            name
            for name in ("rejection_code", "rejection_reason")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"refusal needs {' and '.join(missing)}")
        return self

    def to_rejection_event(self, subject: str | None = None) -> RejectionEvent:
        """Turn a refusal into the event recorded for the turn.

        Only plain str/int/bool context values are carried over; entity
        objects stay behind.

        Raises:
            ValueError: If the result is a go-ahead
        """
        if self.valid:
            raise ValueError("a valid result has nothing to reject")
        assert self.rejection_code is not None and self.rejection_reason is not None

        return RejectionEvent(
            type=EventType.ACTION_REJECTED,
            rejection_code=self.rejection_code,
            rejection_reason=self.rejection_reason,
            subject=subject,
            context={k: v for k, v in self.context.items() if isinstance(v, _EVENT_SAFE_TYPES)},
            hint=self.hint,
        )


def valid_result(**context: object) -> ValidationResult:
    """Go-ahead, with keyword context handed on to execute()."""
    return ValidationResult(valid=True, context=context)


def invalid_result(
    code: RejectionCode,
    reason: str,
    hint: str | None = None,
    **context: object,
) -> ValidationResult:
    """Refusal with a code, the text to show and optional extra context."""
    return ValidationResult(
        valid=False,
        rejection_code=code,
        rejection_reason=reason,
        hint=hint,
        context=context,
    )
