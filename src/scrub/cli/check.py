import logging

import click

from scrub.cli.utils import (
    configure_logging,
    get_env_flag,
    output_error,
    output_result,
    parse_params,
)
from scrub.core import Scrubber
from scrub.errors import ScrubError
from scrub.loaders import load_spec_from_file, load_value_from_file, validate_spec_structure

logger = logging.getLogger(__name__)


@click.command(name="check")
@click.argument("spec_file", type=click.Path(dir_okay=False))
@click.argument("value_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--param", "-p", "params", multiple=True, help="Value field as name=value (repeatable)"
)
@click.option("--strict", is_flag=True, help="Reject fields the spec does not declare")
@click.option("--ignore-defaults", is_flag=True, help="Do not fill in defaults")
@click.option("--ignore-required", is_flag=True, help="Do not check required fields")
@click.option("--no-coerce", is_flag=True, help="Do not convert strings to numbers or booleans")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def check(
    spec_file: str,
    value_file: str | None,
    params: tuple[str, ...],
    strict: bool,
    ignore_defaults: bool,
    ignore_required: bool,
    no_coerce: bool,
    json_output: bool,
    debug: bool,
) -> None:
    """Check a value against a spec and print the scrubbed value.

    The value is read from VALUE_FILE (YAML or JSON). Without VALUE_FILE it is
    an object built from --param pairs, whose values arrive as strings and are
    coerced when the spec asks for numbers or booleans.

    Examples:
        scrub check spec.yml data.json
        scrub check spec.yml -p limit=25 -p verbose=yes
        scrub check spec.yml data.yml --strict --json-output
    """
    if not strict:
        strict = get_env_flag("SCRUB_STRICT")

    configure_logging(debug)

    try:
        spec = load_spec_from_file(spec_file)
        value = load_value_from_file(value_file) if value_file else {}
        if params:
            if not isinstance(value, dict):
                raise ValueError("--param can only be combined with an object value")
            value.update(parse_params(params))

        options = {
            "returnValue": True,
            "strict": strict,
            "ignoreDefaults": ignore_defaults,
            "ignoreRequired": ignore_required,
            "doNotCoerce": no_coerce,
        }
        logger.debug("Checking %s against %s", value_file or "params", spec_file)
        result = Scrubber(spec, options).check(value)
        output_result(result, json_output)
    except (ScrubError, ValueError, FileNotFoundError) as e:
        output_error(e, json_output, debug)


@click.command(name="lint")
@click.argument("spec_file", type=click.Path(dir_okay=False))
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def lint(spec_file: str, json_output: bool, debug: bool) -> None:
    """Check that a spec file is well formed.

    Examples:
        scrub lint spec.yml
    """
    configure_logging(debug)

    try:
        spec = load_spec_from_file(spec_file)
        validate_spec_structure(spec)
        output_result(f"{spec_file}: ok", json_output)
    except (ValueError, FileNotFoundError) as e:
        output_error(e, json_output, debug)
