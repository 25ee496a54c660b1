#!/usr/bin/env python3
"""Command-line interface for the portion calculator."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from portion_calculator.data_layer.recipe_file import RecipeFileLoader
from portion_calculator.data_layer.settings import CalculatorSettings, SettingsLoader
from portion_calculator.output.formatters import (
    NO_RESULTS_MESSAGE,
    SHORT_QUERY_MESSAGE,
    format_candidate_json,
    format_candidates_markdown,
    format_result_json_string,
    format_result_markdown,
)
from portion_calculator.providers.ingredient_provider import IngredientSearchProvider
from portion_calculator.providers.mock_provider import MockIngredientProvider
from portion_calculator.search.controller import IngredientSearchController
from portion_calculator.state.recipe_form import RecipeForm

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/calculator.yaml"


def load_settings(config_path: Optional[str]) -> CalculatorSettings:
    """Load settings from *config_path*, or defaults if no file is available.

    An explicitly given path must exist; the default path is optional.
    """
    if config_path is None:
        default_path = Path(DEFAULT_CONFIG_PATH)
        if not default_path.exists():
            return CalculatorSettings()
        config_path = str(default_path)

    logger.info("Loading settings from %s", config_path)
    return SettingsLoader(config_path).load()


def build_form(args: argparse.Namespace, settings: CalculatorSettings) -> RecipeForm:
    """Create a form from the recipe file, with CLI portions taking precedence."""
    recipe = RecipeFileLoader(args.recipe).load()
    form = RecipeForm(settings)
    form.replace_ingredients(recipe.ingredients)

    original = args.original if args.original is not None else recipe.original_portions
    desired = args.desired if args.desired is not None else recipe.desired_portions

    if original is not None:
        stored = form.set_original_portions(original)
        if str(stored) != str(original).strip():
            print(f"Original portions '{original}' adjusted to {stored}", file=sys.stderr)
    if desired is not None:
        stored = form.set_desired_portions(desired)
        if str(stored) != str(desired).strip():
            print(f"Desired portions '{desired}' adjusted to {stored}", file=sys.stderr)

    return form


def run_calculate(args: argparse.Namespace, settings: CalculatorSettings) -> int:
    recipe_path = Path(args.recipe)
    if not recipe_path.exists():
        print(f"Error: Recipe file not found: {recipe_path}", file=sys.stderr)
        return 1

    print(f"Loading recipe from {recipe_path}...", file=sys.stderr)
    try:
        form = build_form(args, settings)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = form.calculate()
    logger.info(
        "Calculated %d ingredient rows at ratio %.4f",
        len(form.ingredients),
        result.scale_ratio,
    )

    outputs = []
    if args.output in ["markdown", "both"]:
        outputs.append((".md", format_result_markdown(result)))
    if args.output in ["json", "both"]:
        outputs.append((".json", format_result_json_string(result, indent=2)))

    for suffix, text in outputs:
        if args.output_file:
            output_path = Path(args.output_file)
            if args.output == "both":
                output_path = output_path.with_suffix(suffix)
            output_path.write_text(text)
            print(f"Output saved to {output_path}", file=sys.stderr)
        else:
            print(text)

    return 0


async def search_candidates(
    query: str,
    settings: CalculatorSettings,
    provider: Optional[IngredientSearchProvider] = None,
) -> IngredientSearchController:
    """Run one search through the controller and wait for it to settle."""
    if provider is None:
        provider = MockIngredientProvider(delay_seconds=settings.mock_delay_seconds)
    controller = IngredientSearchController.from_settings(provider, settings)
    controller.set_query(query)
    await controller.wait_idle()
    return controller


def run_search(args: argparse.Namespace, settings: CalculatorSettings) -> int:
    controller = asyncio.run(search_candidates(args.query, settings))

    if not controller.is_searchable(args.query):
        print(SHORT_QUERY_MESSAGE.format(min_length=settings.min_query_length))
        return 0
    if not controller.results:
        print(NO_RESULTS_MESSAGE)
        return 0

    if args.output == "json":
        print(json.dumps([format_candidate_json(c) for c in controller.results], indent=2))
    else:
        print(format_candidates_markdown(controller.results))
    return 0


def _add_common_options(parser: argparse.ArgumentParser, subcommand: bool = False) -> None:
    # On subcommands the options are optional overrides of the top-level ones
    parser.add_argument(
        "--config",
        type=str,
        default=argparse.SUPPRESS if subcommand else None,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if subcommand else False,
        help="Log progress details to stderr",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scale recipe portions and recalculate nutrition facts"
    )
    _add_common_options(parser)

    common = argparse.ArgumentParser(add_help=False)
    _add_common_options(common, subcommand=True)

    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser(
        "calculate",
        parents=[common],
        help="Scale a recipe file to the desired number of portions",
    )
    calculate.add_argument("recipe", type=str, help="Path to recipe YAML or JSON file")
    calculate.add_argument(
        "--original",
        type=str,
        default=None,
        help="Number of portions the recipe yields (overrides the file)",
    )
    calculate.add_argument(
        "--desired",
        type=str,
        default=None,
        help="Number of portions wanted, 1-20 (overrides the file)",
    )
    calculate.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json", "both"],
        default="markdown",
        help="Output format: markdown (default), json, or both",
    )
    calculate.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)",
    )

    search = subparsers.add_parser(
        "search", parents=[common], help="Look up ingredient nutrition data"
    )
    search.add_argument("query", type=str, help="Ingredient search text")
    search.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error: Could not load settings: {e}", file=sys.stderr)
        return 1

    if args.command == "calculate":
        return run_calculate(args, settings)
    return run_search(args, settings)


if __name__ == "__main__":
    sys.exit(main())
