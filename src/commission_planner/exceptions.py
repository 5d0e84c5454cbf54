"""Custom exceptions for the commission planner."""


class PlannerError(Exception):
    """Base exception for planner errors."""

    pass


class SubjectNotFoundError(PlannerError):
    """Selected subject code is not present in the catalog."""

    def __init__(self, code: str, available_codes: list[str] | None = None):
        self.code = code
        self.available_codes = available_codes or []
        message = f"Subject '{code}' not found in catalog"
        if self.available_codes:
            message += f". Available codes: {', '.join(self.available_codes)}"
        super().__init__(message)


class UnknownPriorityKindError(PlannerError):
    """Priority type is not one of the supported kinds."""

    def __init__(self, kind: str, supported: list[str] | None = None):
        self.kind = kind
        self.supported = supported or []
        message = f"Unknown priority type: '{kind}'"
        if self.supported:
            message += f". Supported: {', '.join(self.supported)}"
        super().__init__(message)


class InvalidPriorityError(PlannerError):
    """Priority payload does not match its type."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"Invalid {kind} priority: {message}")


class InvalidTimeblockError(PlannerError):
    """Timeblock has an invalid day or time range."""

    def __init__(self, message: str):
        super().__init__(f"Invalid timeblock: {message}")


class CatalogError(PlannerError):
    """Input file could not be read or has the wrong layout."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Cannot load '{path}': {message}")
