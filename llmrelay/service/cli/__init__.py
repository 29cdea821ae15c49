"""``llmrelay`` command line entrypoint.

Parsing lives in ``cli_parser``; subcommand handlers in ``cli_actions``.
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import handle_chat, handle_dry_run, handle_models, plan_run
from .cli_parser import COMMANDS, DEFAULT_COMMAND, build_parser
from .cli_utils import parse_verbosity


def main(argv: Optional[list[str]] = None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.

	Returns
	-------
	int
		Process exit code (0 success, non-zero on error).
	"""
	p = build_parser()
	# inject the default subcommand when omitted
	argv_list = list(sys.argv[1:] if argv is None else argv)
	if not argv_list or argv_list[0] not in {*COMMANDS, "-h", "--help"}:
		argv_list = [DEFAULT_COMMAND] + argv_list
	args = p.parse_args(argv_list)

	if args.log_level:
		level = parse_verbosity(args.log_level)
		if level is None:
			p.error(f"unknown log level: {args.log_level}")
		configure_logger(level=level)

	if args.cmd == "chat":
		return handle_chat(args)
	return handle_models(args) if args.cmd == "models" else handle_dry_run(args)


__all__ = ["main", "plan_run"]


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
