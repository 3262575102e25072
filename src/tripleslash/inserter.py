"""Insertion of documentation templates into an editor buffer.

The third `/` is inserted on its own so undo first reverts to what plain
typing would have produced. The template then goes in with two undo groups:
the empty skeleton first, then the populated text over it, so the buffer's
formatter lays out a content-free block before the real text arrives.
"""

import logging

from tripleslash.buffer import EditableBuffer
from tripleslash.models import CommittedInsert, Entity, InsertionResult, PendingInsert
from tripleslash.templates import DocumentationGenerator
from tripleslash.trigger import COMMENT_LEADER, LEADER_CHAR

logger = logging.getLogger(__name__)

SUMMARY_START = "<summary>"
SUMMARY_END = "</summary>"
SUMMARY_STRIP = " \t\r\n/"


def trim_documentation(doc: str, indent: str) -> str:
    """Drop the indentation and `//` already typed on the line from a template.

    The result starts with the third `/`, which replaces the one inserted for
    the keystroke. Never raises, whatever the template length.
    """
    trim_start = max(0, min(len(doc) - 1, len(indent) + len(COMMENT_LEADER)))
    return doc[trim_start:].rstrip("\r\n")


def summary_span(inserted_length: int, documentation: str) -> tuple[int, int] | None:
    """Locate the summary text of a documentation block as inserted.

    Args:
        inserted_length: Length of the text as inserted in the buffer
        documentation: Documentation text containing the summary

    Returns:
        (start, length) of the summary text relative to the start of the
        inserted block, or None if no summary was found
    """
    # Offsets must follow the buffer's line endings
    if inserted_length > len(documentation):
        documentation = documentation.replace("\n", "\r\n")

    start = documentation.find(SUMMARY_START)
    end = documentation.find(SUMMARY_END)
    if start < 0 or end < 0:
        return None
    start += len(SUMMARY_START)
    summary_text = documentation[start:end].strip(SUMMARY_STRIP)
    start = documentation.find(summary_text, start)
    if start < 0:
        return None
    return start, len(summary_text)


def select_summary(buffer: EditableBuffer, offset: int, inserted_length: int, documentation: str) -> bool:
    """Select the summary text of an inserted documentation block.

    Args:
        buffer: Buffer the documentation was inserted into
        offset: Offset in the buffer where the documentation starts
        inserted_length: Length of the text as inserted in the buffer
        documentation: Documentation text containing the summary

    Returns:
        True if the summary was selected, False if no summary was found
    """
    span = summary_span(inserted_length, documentation)
    if span is None:
        return False

    start, length = span
    buffer.set_caret(offset + start)
    buffer.set_selection(offset + start, offset + start + length)
    return True


class TemplateInserter:
    """Inserts a documentation template at the caret of a buffer.

    Args:
        buffer: The buffer to edit
        generator: Renders the full and empty templates
        two_phase: Insert the empty skeleton before the populated text
        select: Select the summary text after insertion
    """

    def __init__(
        self,
        buffer: EditableBuffer,
        generator: DocumentationGenerator,
        two_phase: bool = True,
        select: bool = True
    ):
        self.buffer = buffer
        self.generator = generator
        self.two_phase = two_phase
        self.select = select

    def generate_documentation(self, entity: Entity, indent: str) -> str:
        return trim_documentation(self.generator.generate_documentation(entity, indent), indent)

    def generate_empty_documentation(self, entity: Entity, indent: str) -> str:
        return trim_documentation(self.generator.generate_empty_documentation(entity, indent), indent)

    def insert(self, entity: Entity, indent: str) -> InsertionResult | None:
        """Insert the documentation for an entity at the caret.

        Args:
            entity: The entity being documented
            indent: Indentation of the caret line

        Returns:
            The insertion outcome, or None if the generator produced nothing
            (the buffer is left untouched)
        """
        documentation = self.generate_documentation(entity, indent)
        if not documentation:
            logger.debug(f"Empty documentation generated for {entity.kind} {entity.name}")
            return None

        offset = self.buffer.caret_offset
        self.buffer.insert(offset, LEADER_CHAR)
        inserted_length = len(LEADER_CHAR)

        pending = None
        if self.two_phase:
            pending = self._insert_placeholder(entity, indent, offset)
            inserted_length = len(pending.placeholder_text)

        with self.buffer.open_undo_group():
            final_text = self.buffer.format_string(offset, documentation)
            self.buffer.replace(offset, inserted_length, final_text)
            committed = CommittedInsert(offset, final_text)
            selected = self.select and select_summary(self.buffer, offset, len(final_text), documentation)
            if not selected:
                self.buffer.set_caret(offset + len(final_text))

        selection = None
        if selected:
            start, length = summary_span(len(final_text), documentation)
            selection = (offset + start, length)

        logger.debug(f"Documented {entity.kind} {entity.name} at offset {offset}")
        return InsertionResult(
            offset=committed.offset,
            text=committed.final_text,
            caret_offset=self.buffer.caret_offset,
            selection=selection,
            pending=pending,
        )

    def _insert_placeholder(self, entity: Entity, indent: str, offset: int) -> PendingInsert:
        with self.buffer.open_undo_group():
            placeholder = self.buffer.format_string(offset, self.generate_empty_documentation(entity, indent))
            self.buffer.replace(offset, len(LEADER_CHAR), placeholder)
            # Caret position is part of this undo step
            self.buffer.set_caret(offset + len(placeholder))
        return PendingInsert(offset, placeholder)
