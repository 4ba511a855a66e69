"""Tests for the transaction boundary and fault handling."""
import pytest

from innerbuilder.models.errors import ErrorKind, GenerationError, GenerationResult, classify
from innerbuilder.services.builder_synthesizer import InnerBuilderSynthesizer
from innerbuilder.services.generate_command import (
    BaseNotifier, ConsoleNotifier, ModelTransaction, execute_generate_action, handle_result,
)
from innerbuilder.services.java_formatter import JavaFormatter
from tests.conftest import HIERARCHY_JAVA, PERSON_JAVA


class RecordingNotifier(BaseNotifier):
    def __init__(self):
        self.messages = []

    def show_message(self, title, message, level):
        self.messages.append((title, message, level))


class FailingFormatter(JavaFormatter):
    """Fails on the final reformat of the builder class."""

    def __init__(self, error):
        self.error = error

    def reformat(self, node):
        if getattr(node, "name", None) == "Builder" and hasattr(node, "inner_classes"):
            raise self.error
        return super().reformat(node)


class TestExecuteGenerateAction:

    def test_success(self, load, synthesizer):
        person = load(PERSON_JAVA)["Person"]
        result = execute_generate_action(person, person.fields, synthesizer)

        assert result.ok
        assert result.message == "Generated Person.Builder"
        assert person.find_inner_class_by_name("Builder") is not None

    def test_failure_rolls_back(self, load, provider, config):
        person = load(PERSON_JAVA)["Person"]
        members = list(person.members)
        synthesizer = InnerBuilderSynthesizer(provider, FailingFormatter(RuntimeError("boom")), config)

        result = execute_generate_action(person, person.fields, synthesizer)

        assert not result.ok
        assert result.kind is ErrorKind.UNCLASSIFIED
        assert person.members == members
        assert person.find_inner_class_by_name("Builder") is None

    def test_failure_restores_existing_builder(self, load, provider, config, synthesizer):
        classes = load(HIERARCHY_JAVA)
        animal, mammal = classes["Animal"], classes["Mammal"]
        synthesizer.execute(mammal, mammal.fields)
        synthesizer.execute(animal, animal.fields)
        builder = mammal.find_inner_class_by_name("Builder")
        members = list(builder.members)

        failing = InnerBuilderSynthesizer(provider, FailingFormatter(GenerationError.tooling("busy")), config)
        result = execute_generate_action(mammal, mammal.fields, failing)

        assert result.kind is ErrorKind.TOOLING
        assert builder.extends is None
        assert builder.superclass is None
        assert builder.members == members

    def test_structure_fault(self, load, synthesizer, monkeypatch):
        person = load(PERSON_JAVA)["Person"]

        def reject(name, type_text):
            raise GenerationError.structure(f"bad field {name}")

        monkeypatch.setattr(synthesizer.provider, "create_field", reject)

        result = execute_generate_action(person, person.fields, synthesizer)

        assert result.kind is ErrorKind.STRUCTURE
        assert not result.recoverable


class TestHandleResult:

    def test_success_passes_through(self):
        notifier = RecordingNotifier()
        result = GenerationResult.success("done")

        assert handle_result(result, notifier) is result
        assert notifier.messages == []

    def test_tooling_fault_is_recoverable(self):
        notifier = RecordingNotifier()
        result = GenerationResult.failure(GenerationError.tooling("index not ready"))

        assert handle_result(result, notifier) is result
        ((title, message, level),) = notifier.messages
        assert title == "Warning"
        assert level == "warning"
        assert "index not ready" in message

    @pytest.mark.parametrize("error", [
        GenerationError.structure("bad declaration"),
        KeyError("missing"),
    ])
    def test_other_faults_are_reraised(self, error):
        notifier = RecordingNotifier()
        result = GenerationResult.failure(error)

        with pytest.raises(type(error)) as excinfo:
            handle_result(result, notifier)
        assert excinfo.value is error
        assert notifier.messages[0][0] == "Error"
        assert notifier.messages[0][2] == "error"

    def test_console_notifier(self, capsys):
        ConsoleNotifier().show_message("Warning", "careful", "warning")

        assert capsys.readouterr().err == "Warning: careful\n"


def test_classify():
    assert classify(GenerationError.tooling("x")) is ErrorKind.TOOLING
    assert classify(GenerationError("x")) is ErrorKind.UNCLASSIFIED
    assert classify(ValueError("x")) is ErrorKind.UNCLASSIFIED
    assert ErrorKind.TOOLING.recoverable
    assert not ErrorKind.STRUCTURE.recoverable


def test_transaction_reraises(load):
    person = load(PERSON_JAVA)["Person"]

    with pytest.raises(ValueError):
        with ModelTransaction(person, "GenerateBuilder"):
            person.members.clear()
            raise ValueError("abort")

    assert [f.name for f in person.fields] == ["name", "age"]
