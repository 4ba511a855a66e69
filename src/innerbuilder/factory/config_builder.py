from innerbuilder.models.generator_config import GeneratorConfig


class GeneratorConfigBuilder:
    """Builder pattern for creating generator configuration."""

    def __init__(self):
        self.config_data = {}

    def with_builder_class_name(self, name: str) -> 'GeneratorConfigBuilder':
        self.config_data['builder_class_name'] = name
        return self

    def with_builder_parameter_name(self, name: str) -> 'GeneratorConfigBuilder':
        self.config_data['builder_parameter_name'] = name
        return self

    def with_copy_parameter_name(self, name: str) -> 'GeneratorConfigBuilder':
        self.config_data['copy_parameter_name'] = name
        return self

    def with_indent(self, width: int) -> 'GeneratorConfigBuilder':
        self.config_data['indent'] = ' ' * width
        return self

    def with_command_name(self, name: str) -> 'GeneratorConfigBuilder':
        self.config_data['command_name'] = name
        return self

    def with_source_encoding(self, encoding: str) -> 'GeneratorConfigBuilder':
        self.config_data['source_encoding'] = encoding
        return self

    def build(self) -> GeneratorConfig:
        return GeneratorConfig(**self.config_data)
