"""Documentation template rendering for C# XML doc comments.

The generator produces complete comment blocks, one `///` line per tag, each
line starting with the indentation it was given:

    /// <summary>
    /// Gets the user name.
    /// </summary>
    /// <param name="id">The identifier.</param>
    /// <returns>The user name.</returns>

The populated variant guesses text from identifier names; the empty variant
has the same tags with no content.
"""

import re
from abc import ABC, abstractmethod
from xml.sax.saxutils import escape

from tripleslash.models import Entity

DOC_LEADER = "///"

_WORD = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")

ABBREVIATIONS = {
    "args": "arguments",
    "ctx": "context",
    "e": "event arguments",
    "id": "identifier",
    "obj": "object",
    "str": "string",
}

# Verbs whose third person form is irregular or must not be guessed
VERBS = {
    "do": "Does",
    "go": "Goes",
    "init": "Initializes",
    "is": "Determines whether this instance is",
    "has": "Determines whether this instance has",
    "can": "Determines whether this instance can",
    "to": "Converts this instance to",
}

RETURNING_KINDS = frozenset({"method", "delegate", "operator", "conversion", "indexer"})


def split_identifier(name: str) -> list[str]:
    """Split a C# identifier into words: `GetHTTPResponse` -> Get, HTTP, Response."""
    return _WORD.findall(name)


def to_phrase(words: list[str]) -> str:
    """Join identifier words as lower case prose, keeping acronyms."""
    phrase = []
    for word in words:
        if len(word) > 1 and word.isupper():
            phrase.append(word)
        else:
            phrase.append(ABBREVIATIONS.get(word.lower(), word.lower()))
    return " ".join(phrase)


def third_person(verb: str) -> str:
    """Conjugate a verb for a summary sentence: `Get` -> `Gets`, `Apply` -> `Applies`."""
    lower = verb.lower()
    if lower in VERBS:
        return VERBS[lower]
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return verb.capitalize() + "es"
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return verb.capitalize()[:-1] + "ies"
    return verb.capitalize() + "s"


def ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


class DocumentationGenerator(ABC):
    """Renders the documentation comment for an entity."""

    @abstractmethod
    def render(self, entity: Entity, indent: str, populated: bool) -> str:
        """Render a full comment block.

        Args:
            entity: The entity to document
            indent: Indentation put in front of every comment line
            populated: False renders the same tags with empty content

        Returns:
            Comment text, one newline-terminated line per tag
        """
        pass

    def generate_documentation(self, entity: Entity, indent: str) -> str:
        return self.render(entity, indent, populated=True)

    def generate_empty_documentation(self, entity: Entity, indent: str) -> str:
        return self.render(entity, indent, populated=False)


class XmlDocGenerator(DocumentationGenerator):
    """Generator for C# XML documentation comments."""

    def render(self, entity: Entity, indent: str, populated: bool) -> str:
        tags = ["<summary>", self.summary(entity) if populated else "", "</summary>"]

        for position, name in enumerate(entity.type_parameters, start=1):
            text = f"The {ordinal(position)} type parameter." if populated else ""
            tags.append(f'<typeparam name="{name}">{text}</typeparam>')

        for parameter in entity.parameters:
            text = f"The {to_phrase(split_identifier(parameter.name))}." if populated else ""
            tags.append(f'<param name="{parameter.name}">{text}</param>')

        if entity.kind in RETURNING_KINDS and entity.return_type:
            text = self.returns(entity) if populated else ""
            tags.append(f"<returns>{text}</returns>")

        if entity.kind == "property":
            text = f"The {to_phrase(split_identifier(entity.name))}." if populated else ""
            tags.append(f"<value>{text}</value>")

        return "".join(f"{indent}{DOC_LEADER} {tag}\n" for tag in tags)

    def summary(self, entity: Entity) -> str:
        """Guess a summary sentence from the entity's kind and name."""
        words = split_identifier(entity.name)
        phrase = to_phrase(words)

        if entity.is_type or entity.kind == "delegate":
            return f"The <c>{entity.name}</c> {entity.kind}."
        if entity.kind == "constructor":
            return f'Initializes a new instance of the <see cref="{entity.name}"/> class.'
        if entity.kind == "destructor":
            return (f'Releases resources held by the <see cref="{entity.name}"/> '
                    "before it is reclaimed by garbage collection.")
        if entity.kind == "property":
            return self._property_summary(entity, words)
        if entity.kind == "indexer":
            names = " and ".join(to_phrase(split_identifier(p.name)) for p in entity.parameters)
            return f"{self._accessor_verb(entity)} the element with the specified {names}."
        if entity.kind == "event":
            return f"Occurs when {phrase}."
        if entity.kind == "operator":
            return f"Implements the {escape(entity.name[len('operator '):])} operator."
        if entity.kind == "conversion":
            return f"Converts to <c>{escape(entity.return_type or '')}</c>."
        if entity.kind in ("field", "enum_member"):
            return f"The {phrase}."

        if not words:
            return f"{entity.name}."
        verb, rest = words[0], to_phrase(words[1:])
        if verb.lower() == "on" and rest:
            return f"Raises the {rest} event."
        if not rest:
            return f"{third_person(verb)}."
        if verb.lower() in ("is", "has", "can", "to"):
            return f"{third_person(verb)} {rest}."
        return f"{third_person(verb)} the {rest}."

    def returns(self, entity: Entity) -> str:
        words = split_identifier(entity.name)
        if entity.return_type == "bool":
            condition = self.summary(entity)
            if condition.startswith("Determines whether "):
                return f"<c>true</c> if {condition[len('Determines whether '):-1]}; otherwise, <c>false</c>."
            return "<c>true</c> on success; otherwise, <c>false</c>."
        if entity.kind in ("method", "delegate") and len(words) > 1:
            return f"The {to_phrase(words[1:])}."
        return f"The <c>{escape(entity.return_type)}</c> result."

    def _property_summary(self, entity: Entity, words: list[str]) -> str:
        if words and words[0].lower() in ("is", "has", "can") and len(words) > 1:
            condition = f"this instance {words[0].lower()} {to_phrase(words[1:])}"
            return f"{self._accessor_verb(entity)} a value indicating whether {condition}."
        return f"{self._accessor_verb(entity)} the {to_phrase(words)}."

    @staticmethod
    def _accessor_verb(entity: Entity) -> str:
        if entity.has_setter and not entity.has_getter:
            return "Sets"
        if entity.has_getter and not entity.has_setter:
            return "Gets"
        return "Gets or sets"
