"""Domain exceptions for the Notes context."""


class NoteValidationError(Exception):
    """Raised when note input falls outside its documented bounds.

    Always a caller-correctable error; ``field`` names the offending input
    and ``constraint`` the bound it violated.
    """

    def __init__(self, field: str, constraint: str):
        super().__init__(f"{field.capitalize()} {constraint}")
        self.field = field
        self.constraint = constraint
