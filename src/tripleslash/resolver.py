import logging

from tripleslash.buffer import TextSource
from tripleslash.models import Declaration, Entity, Location
from tripleslash.parsers.base import SourceModel

logger = logging.getLogger(__name__)


def is_empty_between_lines(source: TextSource, start: int, end: int) -> bool:
    """Check that every line strictly between start and end holds only indentation.

    Args:
        source: Buffer to read lines from
        start: Line number of the caret
        end: Line number of the candidate declaration

    Returns:
        True if lines start+1 .. end-1 are empty or whitespace-only
    """
    for number in range(start + 1, end):
        line = source.get_line(number)
        if line is None:
            break
        if line.length != len(source.line_indent(line)):
            return False
    return True


class AdjacentMemberResolver:
    """Finds the declaration a doc comment typed at the caret belongs to."""

    def __init__(self, source_model: SourceModel, source: TextSource):
        self.source_model = source_model
        self.source = source

    def find(self, caret: Location) -> Entity | None:
        """Return the nearest undocumented declaration following the caret.

        At file scope the first top-level type starting below the caret line is
        taken. Inside a type, its members and then its nested types are scanned
        and the one starting closest after the caret wins. In both cases only
        blank lines may separate the caret line from the declaration.

        Args:
            caret: Caret location at the time of the keystroke

        Returns:
            The resolved entity, or None if nothing qualifies
        """
        type_decl = self.source_model.innermost_type_at(caret)
        if type_decl is None:
            return self._find_top_level(caret)

        result: Declaration | None = None
        for member in self.source_model.members(type_decl):
            if self._is_candidate(member, caret, result):
                result = member

        for nested in self.source_model.nested_types(type_decl):
            if self._is_candidate(nested, caret, result):
                result = nested

        if result is None:
            logger.debug(f"No declaration follows {caret} in {type_decl.name}")
            return None
        return self.source_model.resolve(result)

    def _find_top_level(self, caret: Location) -> Entity | None:
        for type_decl in self.source_model.top_level_types():
            if type_decl.region.begin_line > caret.line:
                if not is_empty_between_lines(self.source, caret.line, type_decl.region.begin_line):
                    logger.debug(f"Code between {caret} and type {type_decl.name}")
                    return None
                return self.source_model.resolve(type_decl)
        return None

    def _is_candidate(self, decl: Declaration, caret: Location, best: Declaration | None) -> bool:
        if decl.begin <= caret:
            return False
        if best is not None and decl.begin >= best.begin:
            return False
        return is_empty_between_lines(self.source, caret.line, decl.region.begin_line)
