from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from tripleslash.models import Line, Location


class TextSource(ABC):
    """Read-only view of an editor buffer: lines, text and caret."""

    @property
    @abstractmethod
    def line_count(self) -> int:
        """Number of lines in the buffer (an empty buffer has one line)."""
        pass

    @property
    @abstractmethod
    def caret_offset(self) -> int:
        """Current caret offset."""
        pass

    @abstractmethod
    def get_line(self, number: int) -> Line | None:
        """Return the line with the given 0-indexed number, or None if out of range."""
        pass

    @abstractmethod
    def get_line_by_offset(self, offset: int) -> Line | None:
        """Return the line containing the given offset, or None if out of range."""
        pass

    @abstractmethod
    def get_text(self, offset: int, length: int) -> str:
        """Return the text of the given range."""
        pass

    def line_text(self, line: Line) -> str:
        return self.get_text(line.offset, line.length)

    def line_indent(self, line: Line) -> str:
        """Leading whitespace of a line."""
        text = self.line_text(line)
        return text[:len(text) - len(text.lstrip(" \t"))]

    def previous_line(self, line: Line) -> Line | None:
        return self.get_line(line.number - 1) if line.number > 0 else None

    def next_line(self, line: Line) -> Line | None:
        return self.get_line(line.number + 1)

    @property
    def caret_location(self) -> Location:
        offset = self.caret_offset
        line = self.get_line_by_offset(offset)
        if line is None:
            raise ValueError(f"Caret offset {offset} is outside the buffer")
        return Location(line.number, offset - line.offset)

    @property
    def caret_line(self) -> Line:
        return self.get_line(self.caret_location.line)


class EditableBuffer(TextSource):
    """An editor buffer that can be modified with grouped undo."""

    @abstractmethod
    def set_caret(self, offset: int) -> None:
        pass

    @abstractmethod
    def set_selection(self, start: int, end: int) -> None:
        """Select the range [start, end)."""
        pass

    @abstractmethod
    def insert(self, offset: int, text: str) -> None:
        pass

    @abstractmethod
    def replace(self, offset: int, length: int, text: str) -> None:
        pass

    @abstractmethod
    def open_undo_group(self) -> AbstractContextManager:
        """Open a scope whose edits form a single undo step.

        The group is closed when the scope exits, also when an edit raised.
        """
        pass

    @abstractmethod
    def format_string(self, offset: int, text: str) -> str:
        """Format text for insertion at the given offset (line endings, layout)."""
        pass
