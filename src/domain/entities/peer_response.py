"""Peer response domain entities."""

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """Outcome of checking a draft peer response against assignment rules.

    ``errors`` block submission; ``warnings`` are advisory only.
    """

    can_submit: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.can_submit = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @classmethod
    def rejected(cls, message: str) -> "ValidationResult":
        """Result carrying a single blocking error."""
        return cls(can_submit=False, errors=[message])
