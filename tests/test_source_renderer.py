"""Tests for rendering the class model back to Java."""
import textwrap

from innerbuilder.factory.config_builder import GeneratorConfigBuilder
from innerbuilder.models.domain_models import Field, JavaClass, Method, Parameter, RawMember
from innerbuilder.services.source_renderer import JavaSourceRenderer
from tests.conftest import PERSON_JAVA


def test_structural_class(renderer):
    builder = JavaClass(name="Builder", modifiers=["public", "static"], extends="Animal.Builder")
    builder.add(Field(name="name", type="String", modifiers=["private", "final"]))
    builder.add(Field(name="age", type="int", modifiers=["private"], initializer="0"))
    builder.add(Method(name="Builder", parameters=[Parameter("String", "name")], modifiers=["public"],
                       body=["this.name = name;"]))
    builder.add(Method(name="age", parameters=[Parameter("int", "age")], return_type="Builder",
                       modifiers=["public"], body=["this.age = age;", "return this;"]))

    assert renderer.render(builder) == textwrap.dedent("""\
        public static class Builder extends Animal.Builder {
            private final String name;
            private int age = 0;

            public Builder(String name) {
                this.name = name;
            }

            public Builder age(int age) {
                this.age = age;
                return this;
            }
        }
    """)


def test_header_and_bodiless_method(renderer):
    repo = JavaClass(name="Repo", modifiers=["public", "abstract"], annotations=["@Deprecated"],
                     type_parameters="<T>", implements=["Closeable", "Iterable<T>"])
    repo.add(Method(name="close", return_type="void", modifiers=["public", "abstract"],
                    throws=["java.io.IOException"]))

    assert renderer.render(repo) == textwrap.dedent("""\
        @Deprecated
        public abstract class Repo<T> implements Closeable, Iterable<T> {
            public abstract void close() throws java.io.IOException;
        }
    """)


def test_verbatim_members_are_reindented(renderer):
    outer = JavaClass(name="Outer")
    outer.add(RawMember("static { init(); }"))
    outer.add(RawMember("/** Does f. */"))
    outer.add(Method(name="f", return_type="void", body=["g();"], source_text="void f() {\n    g();\n}"))

    assert renderer.render(outer) == textwrap.dedent("""\
        class Outer {
            static { init(); }

            /** Does f. */
            void f() {
                g();
            }
        }
    """)


def test_indent_from_config():
    renderer = JavaSourceRenderer(GeneratorConfigBuilder().with_indent(2).build())
    java_class = JavaClass(name="A", members=[Field(name="x", type="int")])

    assert renderer.render(java_class) == "class A {\n  int x;\n}\n"


def test_generated_person(load, synthesizer, renderer):
    person = load(PERSON_JAVA)["Person"]
    synthesizer.execute(person, person.fields)

    assert renderer.render(person) == textwrap.dedent("""\
        public class Person {
            private final String name;
            private int age;

            private Person(Builder builder) {
                this.name = builder.name;
                this.age = builder.age;
            }

            public static class Builder {
                private final String name;
                private int age;

                public Builder(String name) {
                    this.name = name;
                }

                public Builder(Person copy) {
                    this.name = copy.name;
                    this.age = copy.age;
                }

                public Builder age(int age) {
                    this.age = age;
                    return this;
                }

                public Person build() {
                    return new Person(this);
                }
            }
        }
    """)


def test_sealed_header_round_trip(provider, renderer):
    source = textwrap.dedent("""\
        public sealed class Shape implements Drawable permits Circle, Square {
            private final String name;
        }
    """)
    (shape,) = provider.parse_source(source)

    assert renderer.render(shape) == source
