#!/usr/bin/env python3
"""
Customizer CLI - render, export and validate customizer screen definitions.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from .config.loader import ConfigLoader, build_manager
from .manager import CustomizeManager
from .utils.errors import CustomizerError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Input types rendered by the base control without a dedicated class
INPUT_TYPES = {
    "text", "checkbox", "radio", "select", "textarea", "dropdown-pages",
    "email", "url", "number", "hidden", "date", "tel", "search", "range",
}


class CustomizerCLI:
    """Main CLI handler for customizer commands."""

    def __init__(self) -> None:
        self.loader = ConfigLoader()

    def _build(self, config_path: str) -> CustomizeManager:
        config = self.loader.load(config_path)
        return build_manager(config)

    def render(self, config_path: str) -> int:
        """Print the HTML of every control."""
        manager = self._build(config_path)
        manager.enqueue_control_scripts()
        print(manager.render_controls())
        localized = manager.assets.render()
        if localized:
            print(localized)
        return 0

    def export_json(self, config_path: str, indent: int = 2) -> int:
        """Print the data exported to the client."""
        manager = self._build(config_path)
        print(json.dumps(manager.export(), indent=indent, sort_keys=True, default=str))
        return 0

    def templates(self, config_path: str) -> int:
        """Print the client templates of registered control types."""
        manager = self._build(config_path)
        print(manager.render_control_templates())
        return 0

    def check(self, manager: CustomizeManager) -> Tuple[List[str], List[str]]:
        """
        Check a built manager for problems that degrade to empty output.

        Returns:
            (errors, warnings)
        """
        errors: List[str] = []
        warnings: List[str] = []

        for control in manager.controls():
            missing = [key for key, field in control.fields.items() if field is None]
            if missing:
                errors.append(f"Control '{control.id}' is bound to unknown settings: {', '.join(missing)}")

            if control.type in ("radio", "select") and not control.choices:
                warnings.append(f"Control '{control.id}' has no choices and will render nothing")

            if (
                control.type not in INPUT_TYPES
                and manager.control_types.get_control_class(control.type) is None
            ):
                warnings.append(
                    f"Control '{control.id}' has unknown type '{control.type}' (rendered as <input>)"
                )

            if control.type == "dropdown-pages" and not manager.pages:
                warnings.append(f"Control '{control.id}' lists pages but no pages are defined")

        if not manager.controls():
            warnings.append("No controls defined")

        return errors, warnings

    def validate(self, config_path: str) -> int:
        """Validate a configuration file and report problems."""
        print(f"Validating {config_path}...")

        try:
            manager = self._build(config_path)
        except FileNotFoundError as e:
            print(f"\nConfiguration not found:\n  {e}")
            return 1
        except CustomizerError as e:
            print(f"\nValidation FAILED:\n  {e}")
            return 1

        errors, warnings = self.check(manager)

        if errors:
            print("\nValidation FAILED with errors:")
            for error in errors:
                print(f"  ERROR: {error}")
        else:
            print("\nConfiguration is valid")

        if warnings:
            print("\nWarnings:")
            for warning in warnings:
                print(f"  WARNING: {warning}")

        return 1 if errors else 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="customizer",
        description="Render and export theme customizer controls",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  customizer render theme.yaml       # Print control HTML
  customizer json theme.yaml         # Print the client JSON export
  customizer templates theme.yaml    # Print client templates
  customizer validate theme.yaml     # Check a screen definition
""",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in [
        ("render", "Render the HTML of every control"),
        ("json", "Print the JSON exported to the client"),
        ("templates", "Print client templates of registered control types"),
        ("validate", "Validate a screen definition"),
    ]:
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument("config", help="Path to configuration file")
        if name == "json":
            command_parser.add_argument(
                "--indent", type=int, default=2, help="JSON indentation (default: 2)"
            )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    cli = CustomizerCLI()

    try:
        if args.command == "render":
            return cli.render(args.config)
        elif args.command == "json":
            return cli.export_json(args.config, args.indent)
        elif args.command == "templates":
            return cli.templates(args.config)
        elif args.command == "validate":
            return cli.validate(args.config)
        else:
            parser.print_help()
            return 1
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except CustomizerError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
