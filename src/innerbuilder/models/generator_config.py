from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for builder generation."""
    builder_class_name: str = "Builder"
    builder_parameter_name: str = "builder"
    copy_parameter_name: str = "copy"
    setter_prefix: str = "set"
    indent: str = "    "
    # Name of the undoable command the generation runs under
    command_name: str = "GenerateBuilder"
    source_encoding: str = "utf-8"
