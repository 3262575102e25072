from pathlib import Path

from tripleslash.parsers.base import SourceModel
from tripleslash.parsers.csharp_parser import CSharpSourceModel


def get_source_model(file_path: Path, source_code: str) -> SourceModel | None:
    """Build the source model for a file based on its extension.

    Args:
        file_path: Path of the file (only the extension is used)
        source_code: Current text of the file

    Returns:
        A parsed source model, or None if the language is not supported
    """
    if file_path.suffix.lower() == ".cs":
        return CSharpSourceModel(source_code)
    return None
