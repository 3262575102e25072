from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Location:
    """A position in a text buffer (0-indexed line and column)."""
    line: int
    column: int


@dataclass(frozen=True)
class Region:
    """Source span of a declaration."""
    begin: Location
    end: Location

    @property
    def begin_line(self) -> int:
        return self.begin.line


@dataclass(frozen=True)
class Line:
    """A single line of a text buffer.

    `length` excludes the line delimiter, `delimiter_length` is 0 for the last line.
    """
    number: int
    offset: int
    length: int
    delimiter_length: int = 0

    @property
    def end_offset(self) -> int:
        return self.offset + self.length


@dataclass
class Parameter:
    """A method, constructor, indexer or delegate parameter."""
    name: str
    type: str | None = None


@dataclass
class Declaration:
    """An unresolved declaration reported by a source model.

    `node` is the model's own handle and is not part of equality.
    """
    kind: str
    name: str
    region: Region
    node: object = field(default=None, compare=False, repr=False)

    @property
    def begin(self) -> Location:
        return self.region.begin


@dataclass
class Entity:
    """A resolved documentable declaration (type, method, property, field, ...)."""
    kind: str
    name: str
    region: Region
    parameters: list[Parameter] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    return_type: str | None = None  # None for members without a result
    has_getter: bool = False
    has_setter: bool = False
    member_names: list[str] = field(default_factory=list)
    nested_type_names: list[str] = field(default_factory=list)

    @property
    def begin(self) -> Location:
        return self.region.begin

    @property
    def is_type(self) -> bool:
        return self.kind in TYPE_KINDS


TYPE_KINDS = frozenset({"class", "struct", "interface", "enum", "record"})


@dataclass(frozen=True)
class PendingInsert:
    """First phase of an insertion: the content-free skeleton is in the buffer."""
    offset: int
    placeholder_text: str


@dataclass(frozen=True)
class CommittedInsert:
    """Second phase of an insertion: the populated template replaced the skeleton."""
    offset: int
    final_text: str


@dataclass
class InsertionResult:
    """Outcome of a documentation insertion."""
    offset: int
    text: str
    caret_offset: int
    selection: tuple[int, int] | None = None  # (start, length), None if nothing selected
    pending: PendingInsert | None = None  # None when inserted in a single phase
