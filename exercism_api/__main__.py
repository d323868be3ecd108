"""
exercism-api - Command line access to the Exercism APIs

Commands:
- ping: Check the status of the Exercism services
- validate-token: Check whether the API token is valid
- tracks: List language tracks
- exercises: List the exercises of a track
- solutions: Search the user's solutions
- solution: Show one solution, optionally with its iterations
- files: Show the files of a submission
"""

import argparse
import asyncio
import sys
from typing import Any, List, Optional, Type

import httpx
from rich.console import Console
from rich.markup import escape

from . import v1, v2, website
from .api import BaseClient
from .cli import get_cli_credentials
from .client import Credentials
from .config import Settings, get_settings
from .exceptions import ExercismError
from .logging_config import setup_logging

console = Console()
error_console = Console(stderr=True)


def resolve_credentials(args: argparse.Namespace, settings: Settings) -> Optional[Credentials]:
    """``--token`` wins over ``--cli-credentials``, which wins over the environment."""
    if args.token:
        return Credentials.from_api_token(args.token)
    if args.cli_credentials:
        return get_cli_credentials()
    return settings.credentials()


def make_client(
    client_class: Type[BaseClient],
    api_base_url: str,
    args: argparse.Namespace,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    builder = client_class.builder().settings(settings).api_base_url(api_base_url)
    credentials = resolve_credentials(args, settings)
    if credentials is not None:
        builder.credentials(credentials)
    if transport is not None:
        builder.transport(transport)
    return builder.build()


def print_result(result: Any) -> None:
    if hasattr(result, "model_dump"):
        result = result.model_dump(mode="json", by_alias=True)
    console.print_json(data=result)


async def run_command(
    args: argparse.Namespace,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    if args.command in ("ping", "validate-token"):
        async with make_client(v1.Client, settings.v1_api_base_url, args, settings, transport) as client:
            if args.command == "ping":
                print_result(await client.ping())
                return 0
            valid = await client.validate_token()
            print_result({"valid": valid})
            return 0 if valid else 1

    if args.command in ("tracks", "exercises") and args.website:
        client_class, api_base_url = website.Client, settings.website_api_base_url
    else:
        client_class, api_base_url = v2.Client, settings.v2_api_base_url

    async with make_client(client_class, api_base_url, args, settings, transport) as client:
        if args.command == "tracks":
            filters = v2.TrackFilters(
                criteria=args.criteria,
                tags=args.tags or [],
                status=v2.TrackStatusFilter(args.status) if args.status else None,
            )
            result = await client.get_tracks(filters)
        elif args.command == "exercises":
            filters = v2.ExerciseFilters(criteria=args.criteria, include_solutions=args.include_solutions)
            result = await client.get_exercises(args.track, filters)
        elif args.command == "solutions":
            filters = v2.SolutionFilters(
                criteria=args.criteria,
                track=args.track,
                status=v2.SolutionStatus(args.status) if args.status else None,
                mentoring_status=v2.MentoringStatus(args.mentoring_status) if args.mentoring_status else None,
                is_out_of_date=args.out_of_date,
            )
            paging = None
            if args.page is not None:
                paging = v2.Paging.for_page(args.page)
                if args.per_page is not None:
                    paging = paging.and_per_page(args.per_page)
            sort_order = v2.SortOrder(args.order) if args.order else None
            result = await client.get_solutions(filters, paging, sort_order)
        elif args.command == "solution":
            result = await client.get_solution(args.uuid, include_iterations=args.iterations)
        else:
            result = await client.get_submission_files(args.solution_uuid, args.submission_uuid)

    print_result(result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exercism-api",
        description="Query the Exercism APIs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ping
  %(prog)s tracks --status joined --cli-credentials
  %(prog)s exercises rust --include-solutions
  %(prog)s solutions --track rust --page 2 --order newest_first
        """
    )

    # Global options
    parser.add_argument('--token', help='Exercism API token (default: EXERCISM_API_TOKEN)')
    parser.add_argument(
        '--cli-credentials',
        action='store_true',
        help='Read the API token from the Exercism CLI configuration'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Log level (default: EXERCISM_LOG_LEVEL or WARNING)'
    )
    parser.add_argument('--json-logs', action='store_true', help='Emit logs as JSON')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

    subparsers.add_parser('ping', help='Check the status of the Exercism services')
    subparsers.add_parser('validate-token', help='Check whether the API token is valid')

    tracks_parser = subparsers.add_parser('tracks', help='List language tracks')
    tracks_parser.add_argument('--criteria', help='Search criteria')
    tracks_parser.add_argument('--tag', dest='tags', action='append', help='Track tag (repeatable)')
    tracks_parser.add_argument('--status', choices=[s.value for s in v2.TrackStatusFilter])
    tracks_parser.add_argument('--website', action='store_true', help='Use the website API')

    exercises_parser = subparsers.add_parser('exercises', help='List the exercises of a track')
    exercises_parser.add_argument('track', help='Track slug, e.g. rust')
    exercises_parser.add_argument('--criteria', help='Search criteria')
    exercises_parser.add_argument('--include-solutions', action='store_true', help="Include the user's solutions")
    exercises_parser.add_argument('--website', action='store_true', help='Use the website API')

    solutions_parser = subparsers.add_parser('solutions', help="Search the user's solutions")
    solutions_parser.add_argument('--criteria', help='Search criteria')
    solutions_parser.add_argument('--track', help='Track slug')
    solutions_parser.add_argument(
        '--status',
        choices=[s.value for s in v2.SolutionStatus if s is not v2.SolutionStatus.UNKNOWN]
    )
    solutions_parser.add_argument(
        '--mentoring-status',
        choices=[s.value for s in v2.MentoringStatus if s is not v2.MentoringStatus.UNKNOWN]
    )
    sync_group = solutions_parser.add_mutually_exclusive_group()
    sync_group.add_argument('--out-of-date', dest='out_of_date', action='store_true', default=None)
    sync_group.add_argument('--up-to-date', dest='out_of_date', action='store_false')
    solutions_parser.add_argument('--page', type=int, help='Result page')
    solutions_parser.add_argument('--per-page', type=int, help='Results per page (requires --page)')
    solutions_parser.add_argument('--order', choices=[o.value for o in v2.SortOrder])

    solution_parser = subparsers.add_parser('solution', help='Show one solution')
    solution_parser.add_argument('uuid', help='Solution UUID')
    solution_parser.add_argument('--iterations', action='store_true', help='Include iterations')

    files_parser = subparsers.add_parser('files', help='Show the files of a submission')
    files_parser.add_argument('solution_uuid', help='Solution UUID')
    files_parser.add_argument('submission_uuid', help='Submission UUID')

    return parser


def main(
    argv: Optional[List[str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, json_format=args.json_logs)

    try:
        return asyncio.run(run_command(args, settings, transport))
    except ExercismError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    except KeyboardInterrupt:
        error_console.print("\nOperation cancelled.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
