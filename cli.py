#!/usr/bin/env python3
"""powerd6 infrastructure CLI - inspect the desired state without applying it."""
import argparse
import json
import logging
import sys

from powerd6_infra.errors import ConfigurationError, FileAccessError


def cmd_plan(args):
    """Print every declared resource with its creation and deletion order."""
    from powerd6_infra.engine import PlanEngine
    from powerd6_infra.stack import load_resources

    _, graph = load_resources(content_dir=args.content_dir)
    engine = PlanEngine(fmt=args.format, include_content=args.include_content)
    print(engine.render(graph))


def cmd_validate(args):
    """Expand the catalog and report problems, without printing the plan."""
    from powerd6_infra.stack import load_resources

    resource_sets, graph = load_resources(content_dir=args.content_dir)

    logger = logging.getLogger(__name__)
    logger.info(f"Catalog is valid: {len(resource_sets)} repositories, {len(graph)} resources")


def cmd_outputs(args):
    """Print the values exported for each repository."""
    from powerd6_infra.engine import PlanEngine
    from powerd6_infra.stack import load_resources

    resource_sets, graph = load_resources(content_dir=args.content_dir)
    engine = PlanEngine()
    submitted = engine.submit(graph)
    outputs = [engine.outputs(resource_set, submitted) for resource_set in resource_sets]
    print(json.dumps({'repositories': outputs}, indent=2))


def main(argv=None):
    """Main CLI entry point."""
    from powerd6_infra.stack import setup_logging

    parser = argparse.ArgumentParser(
        description='powerd6 infrastructure - managed GitHub repositories',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the resource graph as YAML
  %(prog)s plan

  # Same, as JSON with file contents inlined
  %(prog)s plan --format json --include-content

  # Check the catalog and static content
  %(prog)s validate

Applying the graph is done with `pulumi up`.
"""
    )

    # Global options
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Set the logging level (default: INFO)'
    )
    parser.add_argument(
        '--content-dir',
        help='Directory holding LICENSE.md and CONTRIBUTING.md (default: from config)'
    )

    # Create subparsers for commands
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        required=True
    )

    # Plan command
    plan_parser = subparsers.add_parser(
        'plan',
        help='Print the resource graph',
        description='Print every declared resource with its creation and deletion waves'
    )
    plan_parser.add_argument(
        '--format',
        choices=['yaml', 'json'],
        default='yaml',
        help='Output format (default: yaml)'
    )
    plan_parser.add_argument(
        '--include-content',
        action='store_true',
        help='Inline file contents instead of their SHA-256 digest'
    )
    plan_parser.set_defaults(func=cmd_plan)

    # Validate command
    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate the catalog and static content'
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Outputs command
    outputs_parser = subparsers.add_parser(
        'outputs',
        help='Print the exported values of each repository'
    )
    outputs_parser.set_defaults(func=cmd_outputs)

    # Parse arguments
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    # Execute the command
    try:
        args.func(args)
    except (ConfigurationError, FileAccessError) as e:
        logging.getLogger(__name__).error(str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
