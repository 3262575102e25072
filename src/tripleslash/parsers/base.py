from abc import ABC, abstractmethod

from tripleslash.models import Declaration, Entity, Location


class SourceModel(ABC):
    """Abstract base class for a parsed-source snapshot of one file."""

    @abstractmethod
    def innermost_type_at(self, location: Location) -> Declaration | None:
        """Return the innermost type declaration enclosing a location.

        Args:
            location: Position in the source (0-indexed line and column)

        Returns:
            The enclosing type declaration, or None at file scope
        """
        pass

    @abstractmethod
    def top_level_types(self) -> list[Declaration]:
        """Return the types not nested in another type, in declaration order."""
        pass

    @abstractmethod
    def members(self, type_decl: Declaration) -> list[Declaration]:
        """Return the direct members (methods, properties, fields, ...) of a type."""
        pass

    @abstractmethod
    def nested_types(self, type_decl: Declaration) -> list[Declaration]:
        """Return the types declared directly inside a type."""
        pass

    @abstractmethod
    def resolve(self, declaration: Declaration) -> Entity:
        """Turn a declaration into an entity carrying its signature details."""
        pass
