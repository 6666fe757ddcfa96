"""
ExecutionContext - per-run side channel for diagnostics.

Steps report non-fatal problems here while still deciding their own
outcome through the boolean returned by execute(). The composite engine
never inspects the messages.
"""

from dataclasses import dataclass, field


@dataclass
class ExecutionContext:
    """
    Mutable execution context handed to every step of one execute() call.

    Attributes:
        case_id: Identifier of the case being driven (optional)
    """

    case_id: str | None = None
    _errors: list[str] = field(default_factory=list, repr=False)

    def report_error(self, message: str) -> None:
        """Record a diagnostic message."""
        self._errors.append(message)

    def has_errors(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> tuple[str, ...]:
        """Reported messages in insertion order."""
        return tuple(self._errors)


__all__ = ["ExecutionContext"]
