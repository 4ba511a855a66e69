"""
Test fixtures for innerbuilder.

Provides sample Java sources and ready-wired provider/synthesizer objects.
"""
import textwrap

import pytest
import tree_sitter_java as tsjava
from tree_sitter import Language, Parser

from innerbuilder.models.generator_config import GeneratorConfig
from innerbuilder.processors.java_processor import JavaModelProvider
from innerbuilder.services.builder_synthesizer import InnerBuilderSynthesizer
from innerbuilder.services.class_index_builder import ClassIndexBuilder
from innerbuilder.services.java_formatter import JavaFormatter
from innerbuilder.services.source_renderer import JavaSourceRenderer


PERSON_JAVA = textwrap.dedent("""\
    package com.example;

    public class Person {
        private final String name;
        private int age;
    }
""")

PERSON_WITH_SETTER_JAVA = textwrap.dedent("""\
    package com.example;

    public class Person {
        private final String name;
        private int age;

        public void setAge(int age) {
            if (age < 0) {
                throw new IllegalArgumentException("age");
            }
            this.age = age;
        }
    }
""")

HIERARCHY_JAVA = textwrap.dedent("""\
    package com.example.zoo;

    public class Animal {
        private final String species;
        private int legs;
    }

    class Mammal extends Animal {
        private boolean furry;
    }

    class Dog extends Mammal {
        private String breed;
    }
""")

ABSTRACT_JAVA = textwrap.dedent("""\
    public abstract class Shape {
        private final String color;
        private int zIndex;
    }

    class Circle extends Shape {
        private double radius;
    }
""")


@pytest.fixture(scope="session")
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture(scope="session")
def provider(config) -> JavaModelProvider:
    language = Language(tsjava.language())
    return JavaModelProvider(config, language, Parser(language))


@pytest.fixture
def formatter() -> JavaFormatter:
    return JavaFormatter()


@pytest.fixture
def renderer(config) -> JavaSourceRenderer:
    return JavaSourceRenderer(config)


@pytest.fixture
def synthesizer(provider, formatter, config) -> InnerBuilderSynthesizer:
    return InnerBuilderSynthesizer(provider, formatter, config)


@pytest.fixture
def load(provider):
    """Parse Java source and return its classes indexed by name, superclasses linked."""
    def _load(source: str):
        classes = provider.parse_source(source, "")
        return ClassIndexBuilder().link(classes)
    return _load


@pytest.fixture
def person_file(tmp_path):
    path = tmp_path / "Person.java"
    path.write_text(PERSON_JAVA, encoding="utf-8")
    return path
