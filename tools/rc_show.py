"""CLI to display the options resolved from a lighthouserc file."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from lhci.configs import resolve_options

logger = logging.getLogger("rc_show")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show resolved lighthouserc options")
    parser.add_argument("--config", default=None, help="explicit rc file, skips auto-detection")
    parser.add_argument("--section", default=None, help="e.g. buildContext")
    parser.add_argument("--as", dest="fmt", choices=["json", "yaml"], default="json")
    parser.add_argument("--no-lighthouserc", dest="no_rc", action="store_true", help="disable rc file auto-detection")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        resolved = resolve_options(args.config, argv=["--no-lighthouserc"] if args.no_rc else [])
    except (OSError, ValueError) as exc:
        logger.error("Failed to load rc file: %s", exc)
        return 1

    options = resolved.options
    if args.section:
        for part in args.section.split("."):
            options = options.get(part, {}) if isinstance(options, dict) else {}
    if args.fmt == "json":
        print(json.dumps(options, indent=2, ensure_ascii=False))
    else:
        import yaml

        print(yaml.safe_dump(options, allow_unicode=True, sort_keys=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
