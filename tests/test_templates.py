"""Tests for documentation template rendering."""

from tripleslash.models import Entity, Location, Parameter, Region
from tripleslash.templates import XmlDocGenerator, ordinal, split_identifier, third_person, to_phrase

REGION = Region(Location(0, 0), Location(0, 0))


def _entity(kind, name, **kwargs):
    return Entity(kind=kind, name=name, region=REGION, **kwargs)


def test_split_identifier():
    assert split_identifier("GetHTTPResponse") == ["Get", "HTTP", "Response"]
    assert split_identifier("userName") == ["user", "Name"]
    assert split_identifier("_count2") == ["count", "2"]


def test_to_phrase_keeps_acronyms_and_expands_abbreviations():
    assert to_phrase(["Parse", "XML", "Id"]) == "parse XML identifier"


def test_third_person():
    assert third_person("Get") == "Gets"
    assert third_person("Apply") == "Applies"
    assert third_person("Play") == "Plays"
    assert third_person("Push") == "Pushes"
    assert third_person("do") == "Does"


def test_ordinal():
    assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 101)] == [
        "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "101st"
    ]


class TestXmlDocGenerator:
    """Tests for XmlDocGenerator.render."""

    def test_method_populated(self):
        entity = _entity("method", "GetUserName", parameters=[Parameter("id", "int")], return_type="string")

        doc = XmlDocGenerator().generate_documentation(entity, "    ")

        assert doc == (
            "    /// <summary>\n"
            "    /// Gets the user name.\n"
            "    /// </summary>\n"
            '    /// <param name="id">The identifier.</param>\n'
            "    /// <returns>The user name.</returns>\n"
        )

    def test_method_empty(self):
        entity = _entity("method", "GetUserName", parameters=[Parameter("id", "int")], return_type="string")

        doc = XmlDocGenerator().generate_empty_documentation(entity, "")

        assert doc == (
            "/// <summary>\n"
            "/// \n"
            "/// </summary>\n"
            '/// <param name="id"></param>\n'
            "/// <returns></returns>\n"
        )

    def test_void_method_has_no_returns(self):
        entity = _entity("method", "Reset")

        doc = XmlDocGenerator().render(entity, "", populated=True)

        assert "<returns>" not in doc
        assert "/// Resets.\n" in doc

    def test_type_parameters(self):
        entity = _entity("method", "Store", type_parameters=["TKey", "TValue"])

        doc = XmlDocGenerator().render(entity, "", populated=True)

        assert '/// <typeparam name="TKey">The 1st type parameter.</typeparam>\n' in doc
        assert '/// <typeparam name="TValue">The 2nd type parameter.</typeparam>\n' in doc

    def test_boolean_method(self):
        entity = _entity("method", "IsValid", return_type="bool")
        generator = XmlDocGenerator()

        assert generator.summary(entity) == "Determines whether this instance is valid."
        assert generator.returns(entity) == "<c>true</c> if this instance is valid; otherwise, <c>false</c>."

    def test_event_handler_method(self):
        entity = _entity("method", "OnClosed")

        assert XmlDocGenerator().summary(entity) == "Raises the closed event."

    def test_class(self):
        entity = _entity("class", "Account")

        doc = XmlDocGenerator().render(entity, "", populated=True)

        assert doc == "/// <summary>\n/// The <c>Account</c> class.\n/// </summary>\n"

    def test_constructor(self):
        entity = _entity("constructor", "Account", parameters=[Parameter("owner", "string")])

        assert XmlDocGenerator().summary(entity) == (
            'Initializes a new instance of the <see cref="Account"/> class.'
        )

    def test_property_summaries(self):
        generator = XmlDocGenerator()

        read_write = _entity("property", "Owner", has_getter=True, has_setter=True)
        read_only = _entity("property", "IsEnabled", has_getter=True)

        assert generator.summary(read_write) == "Gets or sets the owner."
        assert generator.summary(read_only) == "Gets a value indicating whether this instance is enabled."
        assert "/// <value>The owner.</value>\n" in generator.render(read_write, "", populated=True)

    def test_indexer(self):
        entity = _entity(
            "indexer", "this", parameters=[Parameter("index", "int")], return_type="string", has_getter=True
        )

        doc = XmlDocGenerator().render(entity, "", populated=True)

        assert "/// Gets the element with the specified index.\n" in doc
        assert "/// <returns>The <c>string</c> result.</returns>\n" in doc

    def test_field_event_and_enum_member(self):
        generator = XmlDocGenerator()

        assert generator.summary(_entity("field", "maxRetries")) == "The max retries."
        assert generator.summary(_entity("event", "Changed")) == "Occurs when changed."
        assert generator.summary(_entity("enum_member", "DarkRed")) == "The dark red."

    def test_operators(self):
        generator = XmlDocGenerator()

        assert generator.summary(_entity("operator", "operator <")) == "Implements the &lt; operator."
        assert generator.summary(_entity("conversion", "operator int", return_type="int")) == (
            "Converts to <c>int</c>."
        )
