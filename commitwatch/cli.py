#!/usr/bin/env python3
"""commitwatch CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from commitwatch.lib.config import load_config
from commitwatch.lib.constants import EXIT_CONFIG
from commitwatch.lib.validate import ValidationError
from commitwatch.commands import status as cmd_status_module
from commitwatch.commands import stats as cmd_stats_module
from commitwatch.commands import watch as cmd_watch_module
from commitwatch.commands import commit as cmd_commit_module
from commitwatch.commands import diff as cmd_diff_module


def get_repo_root(args) -> Path:
    """Repository root from -C, or the current directory."""
    return Path(args.repo).resolve() if args.repo else Path.cwd()


def get_config(args, repo_root: Path):
    """Load config, exiting with a config error if it's invalid."""
    config_path = Path(args.config) if args.config else None
    try:
        return load_config(repo_root, config_path)
    except ValidationError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG)


def _dispatch(handler):
    def run(args):
        repo_root = get_repo_root(args)
        config = get_config(args, repo_root)
        return handler(args, repo_root, config)
    return run


def main():
    parser = argparse.ArgumentParser(prog='cw', description='Split uncommitted changes into small commits')
    parser.add_argument('-C', dest='repo', help='Repository root (default: current directory)')
    parser.add_argument('--config', help='Config file (default: <repo>/.commitwatch.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # cw status
    p_status = subparsers.add_parser('status', help='List changed files')
    p_status.set_defaults(func=_dispatch(cmd_status_module.cmd_status))

    # cw stats
    p_stats = subparsers.add_parser('stats', help='Show change-set size against limits')
    p_stats.add_argument('--alert', action='store_true', help='Desktop notification if over limits')
    p_stats.set_defaults(func=_dispatch(cmd_stats_module.cmd_stats))

    # cw watch
    p_watch = subparsers.add_parser('watch', help='Keep checking change-set size')
    p_watch.add_argument('--interval', '-i', type=float, help='Seconds between checks')
    p_watch.set_defaults(func=_dispatch(cmd_watch_module.cmd_watch))

    # cw commit
    p_commit = subparsers.add_parser('commit', help='Stage, commit and push a bucket')
    p_commit.add_argument('files', nargs='+', help='Files in the bucket')
    p_commit.add_argument('--message', '-m', required=True, help='Commit message')
    p_commit.set_defaults(func=_dispatch(cmd_commit_module.cmd_commit))

    # cw diff
    p_diff = subparsers.add_parser('diff', help='Show diff for a bucket')
    p_diff.add_argument('files', nargs='+', help='Files in the bucket')
    p_diff.set_defaults(func=_dispatch(cmd_diff_module.cmd_diff))

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
