"""Keystroke handler that documents the member below a `///` line."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from tripleslash.buffer import EditableBuffer
from tripleslash.config import DocConfig
from tripleslash.inserter import TemplateInserter
from tripleslash.models import InsertionResult
from tripleslash.parsers import get_source_model
from tripleslash.parsers.base import SourceModel
from tripleslash.parsers.csharp_parser import CSharpSourceModel
from tripleslash.resolver import AdjacentMemberResolver
from tripleslash.templates import DocumentationGenerator, XmlDocGenerator
from tripleslash.text_buffer import TextBuffer
from tripleslash.trigger import TriggerDetector

logger = logging.getLogger(__name__)


class DocCommentExtension:
    """Editor extension generating a doc comment when the third `/` is typed.

    Args:
        buffer: The edited buffer
        source_model: Parsed snapshot of the buffer's current text
        generator: Template renderer, XML doc comments by default
        config: Insertion settings
        default_handler: Called with the typed character when the keystroke
            is not handled; its result is returned by key_press. Inserts the
            character at the caret by default.
    """

    def __init__(
        self,
        buffer: EditableBuffer,
        source_model: SourceModel,
        generator: DocumentationGenerator | None = None,
        config: DocConfig | None = None,
        default_handler: Callable[[str], bool] | None = None
    ):
        self.buffer = buffer
        self.source_model = source_model
        self.generator = generator or XmlDocGenerator()
        self.config = config or DocConfig()
        self.default_handler = default_handler or self._insert_char
        self.last_result: InsertionResult | None = None

    def key_press(self, key_char: str) -> bool:
        """Handle a typed character.

        Returns:
            False if documentation was inserted and the keystroke consumed,
            otherwise the result of the default handler
        """
        self.last_result = None

        if not TriggerDetector(self.buffer).check(key_char):
            return self.default_handler(key_char)

        resolver = AdjacentMemberResolver(self.source_model, self.buffer)
        caret = self.buffer.caret_location
        entity = resolver.find(caret)
        if entity is None:
            logger.debug(f"Nothing to document after {caret}")
            return self.default_handler(key_char)

        inserter = TemplateInserter(
            self.buffer,
            self.generator,
            two_phase=self.config.two_phase_insert,
            select=self.config.select_summary,
        )
        result = inserter.insert(entity, self.buffer.line_indent(self.buffer.caret_line))
        if result is None:
            return self.default_handler(key_char)

        self.last_result = result
        return False

    def _insert_char(self, key_char: str) -> bool:
        self.buffer.insert(self.buffer.caret_offset, key_char)
        return True


@dataclass
class DocumentOutcome:
    """Result of documenting a file at a line."""
    text: str
    result: InsertionResult | None


def document_at(
    source_code: str,
    line: int,
    column: int | None = None,
    config: DocConfig | None = None,
    source_model: SourceModel | None = None
) -> DocumentOutcome:
    """Simulate typing the third `/` at a position of a C# source.

    Args:
        source_code: C# source text
        line: 0-indexed line of the caret, which must end with `//`
        column: Caret column, end of line when None
        config: Insertion settings
        source_model: Parsed snapshot of source_code, parsed as C# when None

    Returns:
        DocumentOutcome with the new text and the insertion result (None when
        the keystroke fell through to plain typing)
    """
    config = config or DocConfig()
    buffer = TextBuffer(source_code, eol=config.line_delimiter)
    buffer.move_caret_to(line, column)

    if source_model is None:
        source_model = CSharpSourceModel(source_code)
    extension = DocCommentExtension(buffer, source_model, config=config)
    extension.key_press("/")
    return DocumentOutcome(text=buffer.text, result=extension.last_result)


def document_file(
    file_path: Path,
    line: int,
    column: int | None = None,
    config: DocConfig | None = None
) -> DocumentOutcome:
    """Simulate typing the third `/` at a position of a source file.

    Args:
        file_path: Path of the source file
        line: 0-indexed line of the caret
        column: Caret column, end of line when None
        config: Insertion settings

    Returns:
        DocumentOutcome for the file's text

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file type not supported or line is out of range
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    # Keep the file's line delimiters
    with open(file_path, encoding="utf-8", newline="") as f:
        source_code = f.read()
    source_model = get_source_model(file_path, source_code)
    if source_model is None:
        raise ValueError(f"Unsupported file type: {file_path}")

    return document_at(source_code, line, column, config=config, source_model=source_model)
