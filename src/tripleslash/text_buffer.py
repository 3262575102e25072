"""In-memory editor buffer with caret, selection and grouped undo history.

This is the buffer the keystroke handler edits when no host editor is around
(the CLI and the tests). Edits made outside an undo group form one undo step
each; edits made inside `open_undo_group()` are collapsed into a single step.
"""

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass, field

from tripleslash.buffer import EditableBuffer
from tripleslash.models import Line

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class _Edit:
    offset: int
    removed: str
    inserted: str


@dataclass
class UndoStep:
    """A user-visible undo step: the edits it contains and the caret around it."""
    caret_before: int
    caret_after: int = 0
    edits: list[_Edit] = field(default_factory=list)


class TextBuffer(EditableBuffer):
    """A text buffer implementing the editor capabilities the extension needs.

    Args:
        text: Initial buffer contents
        eol: Line delimiter used when formatting inserted text. Detected from
            the initial text when not given.
    """

    def __init__(self, text: str = "", eol: str | None = None):
        self._text = text
        self.eol = eol if eol is not None else _detect_eol(text)
        self._caret = 0
        self.selection: tuple[int, int] | None = None  # (start, end)
        self._lines: list[Line] = []
        self._undo_stack: list[UndoStep] = []
        self._redo_stack: list[UndoStep] = []
        self._group: UndoStep | None = None
        self._split_lines()

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def caret_offset(self) -> int:
        return self._caret

    @property
    def undo_steps(self) -> int:
        return len(self._undo_stack)

    @property
    def selected_text(self) -> str | None:
        if self.selection is None:
            return None
        start, end = self.selection
        return self._text[start:end]

    def get_line(self, number: int) -> Line | None:
        if 0 <= number < len(self._lines):
            return self._lines[number]
        return None

    def get_line_by_offset(self, offset: int) -> Line | None:
        if offset < 0 or offset > len(self._text):
            return None
        for line in self._lines:
            if offset <= line.end_offset:
                return line
        return None

    def get_text(self, offset: int, length: int) -> str:
        self._check_range(offset, length)
        return self._text[offset:offset + length]

    def set_caret(self, offset: int) -> None:
        self._check_range(offset, 0)
        self._caret = offset
        self.selection = None

    def set_selection(self, start: int, end: int) -> None:
        self._check_range(start, end - start)
        self.selection = (start, end)

    def move_caret_to(self, line_number: int, column: int | None = None) -> None:
        """Place the caret on a line, at its end when no column is given."""
        line = self.get_line(line_number)
        if line is None:
            raise ValueError(f"Line {line_number} is outside the buffer")
        if column is None or column > line.length:
            column = line.length
        self.set_caret(line.offset + column)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, 0, text)

    def replace(self, offset: int, length: int, text: str) -> None:
        self._check_range(offset, length)
        removed = self._text[offset:offset + length]
        caret_before = self._caret
        self._apply(offset, removed, text)

        if self._caret >= offset + length:
            self._caret += len(text) - length
        elif self._caret > offset:
            self._caret = offset + len(text)
        self.selection = None

        self._redo_stack.clear()
        edit = _Edit(offset, removed, text)
        if self._group is not None:
            self._group.edits.append(edit)
        else:
            self._undo_stack.append(UndoStep(caret_before, self._caret, [edit]))

    @contextmanager
    def open_undo_group(self):
        """Collapse the edits made inside the scope into one undo step.

        Groups nest; only the outermost group pushes a step. The step is pushed
        on exit even when an edit inside the scope raised.
        """
        outer = self._group
        if outer is None:
            self._group = UndoStep(caret_before=self._caret)
        try:
            yield
        finally:
            if outer is None:
                group, self._group = self._group, None
                group.caret_after = self._caret
                if group.edits:
                    self._undo_stack.append(group)

    def undo(self) -> bool:
        """Revert the last undo step. Returns False when there is nothing to undo."""
        if not self._undo_stack:
            return False
        step = self._undo_stack.pop()
        for edit in reversed(step.edits):
            self._apply(edit.offset, edit.inserted, edit.removed)
        self._caret = step.caret_before
        self.selection = None
        self._redo_stack.append(step)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone step. Returns False when there is nothing to redo."""
        if not self._redo_stack:
            return False
        step = self._redo_stack.pop()
        for edit in step.edits:
            self._apply(edit.offset, edit.removed, edit.inserted)
        self._caret = step.caret_after
        self.selection = None
        self._undo_stack.append(step)
        return True

    def format_string(self, offset: int, text: str) -> str:
        """Convert line delimiters of text to the buffer's convention."""
        normalized = text.replace("\r\n", "\n")
        if self.eol == "\n":
            return normalized
        return normalized.replace("\n", self.eol)

    def _apply(self, offset: int, removed: str, inserted: str) -> None:
        self._text = self._text[:offset] + inserted + self._text[offset + len(removed):]
        self._split_lines()

    def _split_lines(self) -> None:
        lines = []
        start = 0
        for match in _LINE_BREAK.finditer(self._text):
            lines.append(Line(
                number=len(lines),
                offset=start,
                length=match.start() - start,
                delimiter_length=match.end() - match.start()
            ))
            start = match.end()
        lines.append(Line(number=len(lines), offset=start, length=len(self._text) - start))
        self._lines = lines

    def _check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self._text):
            logger.debug(f"Rejected range ({offset}, {length}) in buffer of {len(self._text)} chars")
            raise ValueError(f"Range ({offset}, {length}) is outside the buffer")


def _detect_eol(text: str) -> str:
    match = _LINE_BREAK.search(text)
    return match.group(0) if match else "\n"
