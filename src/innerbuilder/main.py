import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from innerbuilder.factory.config_builder import GeneratorConfigBuilder
from innerbuilder.factory.generator_factory import GeneratorFactory
from innerbuilder.models.errors import GenerationError
from innerbuilder.services.generate_command import ConsoleNotifier

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def create_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="innerbuilder",
        description="Generate or update the inner builder of a Java class",
    )
    parser.add_argument("path", help="Java source file, or a directory searched for *.java")
    parser.add_argument("--class", dest="class_name", required=True,
                        help="Class to generate the builder for (simple, Outer.Inner or fully qualified name)")
    parser.add_argument("--fields", default=None,
                        help="Comma-separated fields in generation order (default: all non-static fields)")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--in-place", action="store_true", help="Rewrite the source file")
    output.add_argument("--output", default=None, help="Directory to write the updated source file to")
    parser.add_argument("--builder-name", default=None, help="Name of the nested builder class")
    parser.add_argument("--indent", type=int, default=None, help="Indentation width in spaces")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    configure_logging(args.verbose)

    config_builder = GeneratorConfigBuilder()
    if args.builder_name:
        config_builder.with_builder_class_name(args.builder_name)
    if args.indent is not None:
        config_builder.with_indent(args.indent)
    config = config_builder.build()

    notifier = ConsoleNotifier()
    generator = GeneratorFactory.create_generator("java", config, notifier)
    field_names = [name.strip() for name in args.fields.split(",") if name.strip()] if args.fields else None

    try:
        classes = generator.load_project(Path(args.path))
        target = generator.find_class(classes, args.class_name)
        fields = generator.select_fields(target, field_names)
    except GenerationError as e:
        logger.error(f"Cannot generate builder: {e}")
        notifier.show_message("Warning", str(e), "warning")
        return 1

    result = generator.generate(target, fields)
    if not result.ok:
        return 1

    if args.in_place:
        generator.write_in_place(target)
    elif args.output:
        generator.export(target, Path(args.output))
    else:
        print(generator.render(target), end="")
    logger.info(result.message)
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
