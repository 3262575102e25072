from dataclasses import dataclass
from pathlib import Path

from tripleslash.models import Declaration
from tripleslash.parsers import get_source_model
from tripleslash.parsers.base import SourceModel


@dataclass
class OutlineEntry:
    """A declaration listed by the outline (lines are 0-indexed)."""
    kind: str
    name: str
    line: int
    container: str | None = None  # Enclosing type name, None for top-level types


def outline_declarations(source_model: SourceModel) -> list[OutlineEntry]:
    """List every type and member a doc comment can be generated for.

    Types come before their members; nested types follow their container's
    members.
    """
    entries = []

    def visit(type_decl: Declaration, container: str | None) -> None:
        entries.append(OutlineEntry(type_decl.kind, type_decl.name, type_decl.region.begin_line, container))
        for member in source_model.members(type_decl):
            entries.append(OutlineEntry(member.kind, member.name, member.region.begin_line, type_decl.name))
        for nested in source_model.nested_types(type_decl):
            visit(nested, type_decl.name)

    for type_decl in source_model.top_level_types():
        visit(type_decl, None)
    return entries


def outline_file(file_path: Path) -> list[OutlineEntry]:
    """Outline the declarations of a source file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file type not supported
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    source_model = get_source_model(file_path, file_path.read_text(encoding="utf-8"))
    if source_model is None:
        raise ValueError(f"Unsupported file type: {file_path}")

    return outline_declarations(source_model)
