from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from .api import ParseOptions, parse_file
from .errors import BFError
from .parser import emit

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Parse a Brainfuck-style program into resolved run-length encoded instructions."
    )
    parser.add_argument("path", help="Program source file")
    parser.add_argument("--allow-empty-loops", action="store_true", help="Do not reject empty loop bodies ([])")
    parser.add_argument("--emit", action="store_true", help="Print the filtered program instead of the listing")
    parser.add_argument("--encoding", default="utf-8", help="Source file encoding (default utf-8)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    options = ParseOptions(strict_empty_loops=not args.allow_empty_loops, encoding=args.encoding)

    start = time.time()
    try:
        result = parse_file(args.path, options=options)
    except FileNotFoundError:
        print(f"Couldn't find file: {args.path}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Couldn't decode {args.path} as {args.encoding}: {e}", file=sys.stderr)
        return 1
    except LookupError as e:
        print(f"Unknown encoding: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Couldn't read {args.path}: {e.strerror or e}", file=sys.stderr)
        return 1
    except BFError as e:
        print(str(e), file=sys.stderr)
        return 1
    end = time.time()

    logger.debug("%d commands -> %d instructions", result.filtered_length, len(result.instructions))

    if args.emit:
        sys.stdout.write(emit(list(result.instructions)) + "\n")
        return 0

    for inst in result.instructions:
        print(inst)
    print("================")
    print(f"Parsing took {(end - start) * 1000:.2f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
