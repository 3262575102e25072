import logging

from tripleslash.buffer import TextSource
from tripleslash.models import Line

logger = logging.getLogger(__name__)

LEADER_CHAR = "/"
COMMENT_LEADER = "//"
DOC_COMMENT_LEADER = "///"


def should_trigger(key_char: str, line_text: str) -> bool:
    """Check whether typing key_char on a line completes the `///` sequence.

    Args:
        key_char: The character being typed
        line_text: Full text of the caret line before the keystroke

    Returns:
        True if the line already ends with `//` and the third `/` is typed
    """
    return key_char == LEADER_CHAR and line_text.endswith(COMMENT_LEADER)


def _is_blank(source: TextSource, line: Line) -> bool:
    return line.length == 0 or not source.line_text(line).strip()


def has_adjacent_documentation(source: TextSource, line: Line) -> bool:
    """Check whether a doc comment already sits next to a line.

    Blank lines are skipped in both directions; the first non-blank line above
    and the first one below are checked for a leading `///`.
    """
    for step in (source.previous_line, source.next_line):
        neighbour = step(line)
        while neighbour is not None and _is_blank(source, neighbour):
            neighbour = step(neighbour)
        if neighbour is not None and source.line_text(neighbour).lstrip().startswith(DOC_COMMENT_LEADER):
            return True
    return False


class TriggerDetector:
    """Decides whether a keystroke starts documentation generation."""

    def __init__(self, source: TextSource):
        self.source = source

    def check(self, key_char: str) -> bool:
        line = self.source.caret_line
        if not should_trigger(key_char, self.source.line_text(line)):
            return False
        if has_adjacent_documentation(self.source, line):
            logger.debug(f"Documentation already adjacent to line {line.number}")
            return False
        return True
