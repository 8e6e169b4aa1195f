"""Exceptions raised (or reported) by the resume analysis engine."""

from typing import Optional


class ResumeEngineError(Exception):
    """Base class for engine errors."""


class MalformedDocument(ResumeEngineError, ValueError):
    """The submitted text is empty or has no extractable words."""


class InvalidRubricConfig(ResumeEngineError, ValueError):
    """A rubric configuration file could not be read or is not a JSON object."""


class UnknownConfigReference(ResumeEngineError):
    """A rubric entry references a skill or section label that does not exist.

    These are never raised during analysis. The config loader drops the
    offending reference, logs it and keeps the instance on
    ``RubricConfig.unknown_references`` so callers can surface it.
    """

    def __init__(self, kind: str, reference: str, context: Optional[str] = None):
        self.kind = kind
        self.reference = reference
        self.context = context
        message = f"Unknown {kind} reference '{reference}'"
        if context:
            message += f" in {context}"
        super().__init__(message)

    def __eq__(self, other):
        if not isinstance(other, UnknownConfigReference):
            return NotImplemented
        return (self.kind, self.reference, self.context) == (other.kind, other.reference, other.context)

    def __hash__(self):
        return hash((self.kind, self.reference, self.context))
