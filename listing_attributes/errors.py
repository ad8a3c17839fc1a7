"""Exceptions raised by the attribute stores and resolver."""


class AttributeServiceError(Exception):
    """Base class for attribute service errors."""


class TransportFailure(AttributeServiceError):
    """A remote attribute read could not be completed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class MalformedValueError(AttributeServiceError, ValueError):
    """A value does not match its definition's declared type."""

    def __init__(self, attribute_id: str, reason: str, attribute_name: str | None = None):
        self.attribute_id = attribute_id
        self.attribute_name = attribute_name
        self.reason = reason
        label = attribute_name or attribute_id
        super().__init__(f"Invalid value for attribute '{label}': {reason}")


class MissingRequiredValueError(AttributeServiceError, ValueError):
    """A required attribute was left unset."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(f"Required attributes missing: {', '.join(names)}")


class InvalidDefinitionError(AttributeServiceError, ValueError):
    """An attribute definition failed validation."""


class CategoryNotFoundError(AttributeServiceError, LookupError):
    """The referenced category does not exist."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category '{category_id}' not found")


class DefinitionNotFoundError(AttributeServiceError, LookupError):
    """The referenced attribute definition does not exist."""

    def __init__(self, attribute_id: str):
        self.attribute_id = attribute_id
        super().__init__(f"Attribute '{attribute_id}' not found")


class DefinitionInUseError(AttributeServiceError):
    """An attribute definition cannot be deleted while values reference it."""

    def __init__(self, attribute_id: str, value_count: int):
        self.attribute_id = attribute_id
        self.value_count = value_count
        super().__init__(
            f"Cannot delete attribute '{attribute_id}' - has {value_count} stored values"
        )
