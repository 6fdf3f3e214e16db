"""Entry point for the header formatting package.

Usage::

    python -m umbrella_headers <header-key> <value>           # print "Key: encoded value"
    python -m umbrella_headers boundary <node-id> <base>      # print a multipart boundary
"""

from __future__ import annotations

import sys

USAGE = (
    "Usage: python -m umbrella_headers <header-key> <value>\n"
    "       python -m umbrella_headers boundary <node-id> <base-boundary>"
)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    from .logging import setup_logging

    setup_logging()

    if len(args) == 3 and args[0] == "boundary":
        from .params import generate_boundary

        print(generate_boundary(args[1], args[2]))
        return 0

    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return 1

    from .errors import GrammarError
    from .headers import format_header

    try:
        print(format_header(args[0], args[1]))
    except GrammarError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
