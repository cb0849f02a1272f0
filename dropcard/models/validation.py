from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """
    Per-field validation outcome.

    Maps field name to a user-facing error message. A field absent from
    the mapping is valid; an empty result means the form may be saved.
    """

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        """Record an error for a field. The first error per field wins."""
        self.errors.setdefault(field_name, message)

    def get(self, field_name: str) -> str | None:
        return self.errors.get(field_name)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.errors

    def __len__(self) -> int:
        return len(self.errors)
