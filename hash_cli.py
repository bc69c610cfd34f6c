"""Command line front end for the hash engines.

Usage:
    streamhash "message"
    streamhash -a sm3 -f path/to/file
    streamhash -a sha512_224 -f a.bin -f b.bin
    streamhash -a tuplehash128 -l 32 -c "My Tuple App" first second third

Plain hashes print one ``<hexdigest>  <label>`` line per input. The tuple
hashes treat every input, messages and files alike and in command-line
order, as one tuple element and print a single digest.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Iterator, List, Sequence, Tuple

from algorithms import ALGORITHMS, new
from tuple_hash import TupleHash128, TupleHash256


logger = logging.getLogger(__name__)

TUPLE_ALGORITHMS = {
    TupleHash128.name: TupleHash128,
    TupleHash256.name: TupleHash256,
}

DEFAULT_CHUNK_SIZE = 64 * 1024

_VALUE_OPTIONS = {"-a", "--algorithm", "-f", "--file", "--chunk-size", "-l", "--length", "-c", "--customization"}
_FILE_OPTIONS = {"-f", "--file"}
_OPTIONS = _VALUE_OPTIONS | {"-v", "--verbose", "-h", "--help"}
_NEGATIVE_NUMBER = re.compile(r"^-\d+$|^-\d*\.\d+$")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamhash",
        description="Hash messages or files with SHA-2, SM3 or TupleHash.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "messages",
        nargs="*",
        help="UTF-8 messages to hash",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default="sha256",
        choices=sorted(ALGORITHMS) + sorted(TUPLE_ALGORITHMS),
        help="hash algorithm (default: sha256)",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        default=[],
        help="file whose raw bytes are hashed (may be repeated)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="read size in bytes when streaming files",
    )
    parser.add_argument(
        "-l",
        "--length",
        type=int,
        default=None,
        help="tuple hash output length in bytes (default: 32 / 64)",
    )
    parser.add_argument(
        "-c",
        "--customization",
        default="",
        help="tuple hash customization string",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress (-vv for debug output)",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _read_chunks(path: str, chunk_size: int) -> Iterator[bytes]:
    """Yield the contents of `path` in `chunk_size`-byte pieces."""
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                return
            yield chunk


def _ordered_inputs(argv: Sequence[str]) -> List[Tuple[str, str]]:
    """Return ``(kind, value)`` for every message and ``-f`` file in argv order.

    argparse collects positionals and ``-f`` values into separate lists, so the
    command line is walked again to recover how the two interleave. `kind` is
    ``"message"`` or ``"file"``.
    """
    inputs: List[Tuple[str, str]] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            inputs.extend(("message", rest) for rest in tokens)
            break
        if not token.startswith("-") or token == "-":
            inputs.append(("message", token))
            continue

        option, sep, value = token.partition("=")
        if token in _OPTIONS or (sep and option in _OPTIONS):
            if not sep:
                option = token
                if option in _VALUE_OPTIONS:
                    value = next(tokens, "")
            if option in _FILE_OPTIONS:
                inputs.append(("file", value))
            continue
        if token.startswith("--"):
            continue

        if token[:2] not in _OPTIONS:
            if _NEGATIVE_NUMBER.match(token) or " " in token:
                inputs.append(("message", token))
            continue
        # Short option cluster such as -vv, -vf path or -fpath.
        for i, flag in enumerate(token[1:], start=2):
            option = "-" + flag
            if option in _VALUE_OPTIONS:
                value = token[i:] or next(tokens, "")
                if option in _FILE_OPTIONS:
                    inputs.append(("file", value))
                break
    return inputs


def _hash_inputs(args: argparse.Namespace, inputs: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
    results: List[Tuple[str, str]] = []
    for kind, value in inputs:
        if kind == "message":
            h = new(args.algorithm, value.encode("utf-8"))
            results.append((h.finalize().hexdigest(), repr(value)))
            continue
        h = new(args.algorithm)
        for chunk in _read_chunks(value, args.chunk_size):
            h.update(chunk)
        logger.info("Read %d bytes from %s", h.message_length, value)
        results.append((h.finalize().hexdigest(), value))
    return results


def _tuple_hash_inputs(args: argparse.Namespace, inputs: List[Tuple[str, str]]) -> str:
    cls = TUPLE_ALGORITHMS[args.algorithm]
    length = args.length
    if length is None:
        length = 32 if cls is TupleHash128 else 64
    h = cls(length, args.customization)

    for kind, value in inputs:
        if kind == "message":
            h.next_data(value.encode("utf-8"))
            continue
        # A tuple element is hashed with its length prefix, so files are read whole.
        with open(value, "rb") as f:
            data = f.read()
        logger.info("Read %d bytes from %s", len(data), value)
        h.next_data(data)
    return h.finalize().hexdigest()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)
    _configure_logging(args.verbose)

    inputs = _ordered_inputs(argv)
    messages = [value for kind, value in inputs if kind == "message"]
    files = [value for kind, value in inputs if kind == "file"]
    if messages != args.messages or files != args.files:
        parser.error("could not tell messages and files apart; put messages after --")

    if not inputs:
        parser.print_usage(sys.stderr)
        sys.stderr.write("streamhash: error: nothing to hash, pass a message or -f FILE\n")
        return 1
    if args.chunk_size <= 0:
        sys.stderr.write(f"streamhash: error: --chunk-size must be positive, got {args.chunk_size}\n")
        return 1
    if args.length is not None and args.algorithm not in TUPLE_ALGORITHMS:
        sys.stderr.write("streamhash: error: --length only applies to the tuple hashes\n")
        return 1

    try:
        if args.algorithm in TUPLE_ALGORITHMS:
            print(_tuple_hash_inputs(args, inputs))
        else:
            for digest_hex, label in _hash_inputs(args, inputs):
                print(f"{digest_hex}  {label}")
    except OSError as e:
        sys.stderr.write(f"Error reading file '{e.filename}': {e.strerror}\n")
        return 1
    except ValueError as e:
        sys.stderr.write(f"streamhash: error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
