from tripleslash.models import Location, Parameter
from tripleslash.parsers.csharp_parser import CSharpSourceModel

SOURCE = """using System;

namespace Demo
{
    public class Account
    {
        private int balance;

        public Account(string owner)
        {
        }

        public string Owner { get; set; }

        public bool IsActive { get; }

        public int GetBalance(int month, string currency)
        {
            return balance;
        }

        public class Statement
        {
        }
    }

    public enum Color
    {
        Red,
        Green
    }
}
"""


def _type(model, name):
    return next(t for t in model.top_level_types() if t.name == name)


def test_top_level_types_look_through_namespaces():
    model = CSharpSourceModel(SOURCE)

    types = model.top_level_types()

    assert [t.name for t in types] == ["Account", "Color"]
    assert [t.kind for t in types] == ["class", "enum"]
    assert types[0].region.begin == Location(4, 4)
    assert types[1].region.begin_line == 26


def test_innermost_type_at_member_body():
    model = CSharpSourceModel(SOURCE)

    type_decl = model.innermost_type_at(Location(18, 12))

    assert type_decl is not None
    assert type_decl.name == "Account"


def test_innermost_type_prefers_nested_type():
    model = CSharpSourceModel(SOURCE)

    type_decl = model.innermost_type_at(Location(22, 9))

    assert type_decl.name == "Statement"


def test_innermost_type_at_file_scope():
    model = CSharpSourceModel(SOURCE)

    assert model.innermost_type_at(Location(1, 0)) is None


def test_members_in_declaration_order():
    model = CSharpSourceModel(SOURCE)

    members = model.members(_type(model, "Account"))

    assert [m.name for m in members] == ["balance", "Account", "Owner", "IsActive", "GetBalance"]
    assert [m.kind for m in members] == ["field", "constructor", "property", "property", "method"]
    assert members[0].region.begin == Location(6, 8)


def test_nested_types():
    model = CSharpSourceModel(SOURCE)

    nested = model.nested_types(_type(model, "Account"))

    assert [t.name for t in nested] == ["Statement"]
    assert nested[0].region.begin_line == 21


def test_enum_members():
    model = CSharpSourceModel(SOURCE)

    members = model.members(_type(model, "Color"))

    assert [m.name for m in members] == ["Red", "Green"]
    assert all(m.kind == "enum_member" for m in members)
    assert model.nested_types(_type(model, "Color")) == []


def test_resolve_method():
    model = CSharpSourceModel(SOURCE)
    method = model.members(_type(model, "Account"))[4]

    entity = model.resolve(method)

    assert entity.kind == "method"
    assert entity.name == "GetBalance"
    assert entity.parameters == [Parameter("month", "int"), Parameter("currency", "string")]
    assert entity.return_type == "int"
    assert entity.region == method.region


def test_resolve_constructor_has_no_return_type():
    model = CSharpSourceModel(SOURCE)
    constructor = model.members(_type(model, "Account"))[1]

    entity = model.resolve(constructor)

    assert entity.parameters == [Parameter("owner", "string")]
    assert entity.return_type is None


def test_resolve_property_accessors():
    model = CSharpSourceModel(SOURCE)
    members = model.members(_type(model, "Account"))

    owner = model.resolve(members[2])
    is_active = model.resolve(members[3])

    assert owner.has_getter and owner.has_setter
    assert is_active.has_getter and not is_active.has_setter


def test_resolve_type_lists_children():
    model = CSharpSourceModel(SOURCE)

    entity = model.resolve(_type(model, "Account"))

    assert entity.is_type
    assert entity.member_names == ["balance", "Account", "Owner", "IsActive", "GetBalance"]
    assert entity.nested_type_names == ["Statement"]


def test_resolve_generic_void_method():
    source = """class Cache
{
    public void Store<TKey, TValue>(TKey key, TValue value)
    {
    }
}
"""
    model = CSharpSourceModel(source)
    method = model.members(model.top_level_types()[0])[0]

    entity = model.resolve(method)

    assert entity.type_parameters == ["TKey", "TValue"]
    assert [p.name for p in entity.parameters] == ["key", "value"]
    assert entity.return_type is None


def test_attributes_are_part_of_the_region():
    source = """class Service
{
    [Obsolete]
    public void Run()
    {
    }
}
"""
    model = CSharpSourceModel(source)

    method = model.members(model.top_level_types()[0])[0]

    assert method.region.begin == Location(2, 4)


def test_file_scoped_namespace():
    source = """namespace Demo;

public interface IStore
{
    void Save();
}
"""
    model = CSharpSourceModel(source)

    types = model.top_level_types()

    assert [(t.kind, t.name) for t in types] == [("interface", "IStore")]
    assert [m.name for m in model.members(types[0])] == ["Save"]


def test_delegate_is_a_type_without_members():
    source = """public delegate bool Filter(string item);
"""
    model = CSharpSourceModel(source)

    types = model.top_level_types()

    assert types[0].kind == "delegate"
    entity = model.resolve(types[0])
    assert entity.return_type == "bool"
    assert entity.parameters == [Parameter("item", "string")]
    assert model.innermost_type_at(Location(0, 30)) is None


def test_columns_count_characters_not_bytes():
    source = 'class A { string s = "é"; public void M() {} }\n'
    model = CSharpSourceModel(source)

    members = model.members(model.top_level_types()[0])

    assert members[1].region.begin == Location(0, 26)


def test_cr_line_endings_count_as_lines():
    source = "class A\r{\r    int count;\r    void Run() { }\r}\r"
    model = CSharpSourceModel(source)

    type_decl = model.top_level_types()[0]
    members = model.members(type_decl)

    assert [m.region.begin for m in members] == [Location(2, 4), Location(3, 4)]
    assert model.innermost_type_at(Location(2, 6)).name == "A"
