"""Command line entry point for deploying a Cloudflare KV namespace."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from src.config.settings import get_settings

from .config import locate_kv_config, load_kv_config
from .errors import DeployError
from .provision import deploy_kv
from .wrangler import Wrangler


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deploy-kv",
        description="Deploy a cloudflare KV.",
    )
    parser.add_argument(
        "kv_config",
        metavar="<kv-config>",
        help="A cloudflare KV config. This can be the name of a config file found "
        "in 'cloudflare/kvs' or can be a path to a config file.",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Project directory holding node_modules/ and cloudflare/kvs/ "
        "(defaults to the PROJECT_DIR setting).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log wrangler invocations.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Return 0 on success, otherwise the exit code of the failed step."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    project_dir = args.project_dir if args.project_dir is not None else get_settings().project_dir
    wrangler = Wrangler(project_dir)

    try:
        wrangler.ensure_installed()
        config = load_kv_config(locate_kv_config(args.kv_config, project_dir))
        deploy_kv(config, wrangler)
    except DeployError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.exit_code

    return 0


def console_entrypoint() -> NoReturn:
    sys.exit(main())


__all__ = ["console_entrypoint", "main"]
