"""tripleslash - XML documentation comment skeletons for C# editors."""

try:
    from importlib.metadata import version

    __version__ = version("tripleslash")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
