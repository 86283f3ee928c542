"""Load the lighthouserc file with its extends chain and report problems."""
from __future__ import annotations

import argparse
import logging
import sys

from lhci.configs import resolve_options

logger = logging.getLogger("rc_lint")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lint lighthouserc")
    parser.add_argument("--config", default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        resolved = resolve_options(args.config, argv=[])
    except (OSError, ValueError) as exc:
        logger.error("Validation failed: %s", exc)
        return 1
    if resolved.rc_path is None:
        logger.warning("No rc file found")
        return 1
    print("Validation OK:", " -> ".join(str(p) for p in resolved.sources))
    return 0


if __name__ == "__main__":
    sys.exit(main())
