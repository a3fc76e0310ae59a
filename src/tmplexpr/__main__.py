"""CLI entry point: `tmplexpr "<expression>"` or `python -m tmplexpr "<expression>"`."""

import sys


def main() -> int:
    import argparse
    import logging
    from .compiler import ExpressionServices, TransformContext, generate_expression
    from .passes import process_expression
    from .shared import ErrorReporter, create_expression, location_from_source
    from .utils.config import CONTEXT_PREFIX

    parser = argparse.ArgumentParser(
        prog="tmplexpr",
        description="Prefix free identifiers of a template expression with the render context.",
    )
    parser.add_argument("expression", help="Expression text, e.g. 'foo + bar'")
    parser.add_argument(
        "--known",
        action="append",
        default=[],
        metavar="NAME",
        help="Identifier already bound by the template (repeatable)",
    )
    parser.add_argument("--prefix", default=CONTEXT_PREFIX, help=f"Context prefix (default: {CONTEXT_PREFIX})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug traces to stderr")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    reporter = ErrorReporter(template=args.expression, filename="<expression>")
    context = TransformContext(
        services=ExpressionServices.create(),
        identifiers={name: 1 for name in args.known},
        context_prefix=args.prefix,
        reporter=reporter,
    )
    node = create_expression(args.expression, False, location_from_source(args.expression))
    process_expression(node, context)

    if reporter.has_errors():
        reporter.print_errors()
        return 1

    sys.stdout.write(generate_expression(node) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
