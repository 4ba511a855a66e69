"""Tests for the formatter collaborator."""
import pytest

from innerbuilder.models.domain_models import Field, JavaClass, Method, Parameter
from innerbuilder.services.java_formatter import normalize_statement


@pytest.mark.parametrize("raw,expected", [
    ("name= builder.name;", "name = builder.name;"),
    ("this.name=name;", "this.name = name;"),
    ("this.age   =  copy.age ;", "this.age = copy.age;"),
    ("return new Person(this);", "return new Person(this);"),
    ("call( a ,b );", "call(a, b);"),
    ("x += 1;", "x += 1;"),
    ("ok = a == b;", "ok = a == b;"),
    ("ok = a != b;", "ok = a != b;"),
    ("ok = a <= b;", "ok = a <= b;"),
    ('s="a=b";', 's="a=b";'),
])
def test_normalize_statement(raw, expected):
    assert normalize_statement(raw) == expected


class TestReformat:

    def test_generated_method(self, formatter):
        method = Method(
            name="Builder",
            parameters=[Parameter("Map<K,V>", "map")],
            return_type=None,
            body=["this.map=map;"],
        )

        assert formatter.reformat(method) is method
        assert method.parameters[0].type == "Map<K, V>"
        assert method.body == ["this.map = map;"]

    def test_verbatim_members_are_untouched(self, formatter):
        method = Method(name="f", return_type="void", body=["x=1;"], source_text="void f() { x=1; }")
        field = Field(name="m", type="Map<K,V>", source_text="Map<K,V> m;")
        java_class = JavaClass(name="C", members=[method, field])

        formatter.reformat(java_class)

        assert method.body == ["x=1;"]
        assert field.type == "Map<K,V>"

    def test_recurses_into_nested_classes(self, formatter):
        inner = JavaClass(name="Builder", members=[Method(name="b", return_type="void", body=["a=b;"])])
        outer = JavaClass(name="Outer", members=[inner])

        formatter.reformat(outer)

        assert inner.members[0].body == ["a = b;"]
