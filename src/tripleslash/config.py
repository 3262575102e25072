"""Configuration management for documentation generation."""

from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_FILE_NAME = ".tripleslash"

EOL_NAMES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass
class DocConfig:
    """Configuration for documentation insertion.

    Attributes:
        two_phase_insert: Insert an empty skeleton before the populated
            documentation, as two undo steps. When False the populated text
            replaces the typed `/` in a single step.
        select_summary: Select the summary text after insertion. When False
            the caret is left at the end of the inserted block.
        eol: Line delimiter for buffers created from files, one of "lf",
            "crlf" or "cr". None keeps the delimiter found in the file.
    """
    two_phase_insert: bool = True
    select_summary: bool = True
    eol: str | None = None

    @property
    def line_delimiter(self) -> str | None:
        """The configured delimiter as text, None when detected from content."""
        if self.eol is None:
            return None
        return EOL_NAMES.get(self.eol.lower())


def load_doc_config(repo_root: Path | None = None) -> DocConfig:
    """Load documentation configuration from .tripleslash file in repository root.

    Args:
        repo_root: Path to repository root. If None, uses current directory.

    Returns:
        DocConfig object with loaded or default values.

    Notes:
        If .tripleslash file doesn't exist or can't be parsed, returns default config.
        Expected YAML structure:

        ```yaml
        documentation:
          two_phase_insert: true
          select_summary: true
          eol: crlf
        ```
    """
    if repo_root is None:
        repo_root = Path.cwd()

    config_path = repo_root / CONFIG_FILE_NAME

    if not config_path.exists():
        return DocConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return DocConfig()

        doc_config = data.get("documentation", {})
        if not isinstance(doc_config, dict):
            return DocConfig()

        eol = doc_config.get("eol", DocConfig.eol)
        if eol is not None and str(eol).lower() not in EOL_NAMES:
            eol = None

        return DocConfig(
            two_phase_insert=_flag(doc_config, "two_phase_insert", DocConfig.two_phase_insert),
            select_summary=_flag(doc_config, "select_summary", DocConfig.select_summary),
            eol=eol,
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError):
        # Return default config on any parsing errors
        return DocConfig()


def _flag(section: dict, key: str, default: bool) -> bool:
    # Only YAML booleans count, a quoted "false" keeps the default
    value = section.get(key, default)
    return value if isinstance(value, bool) else default
