"""
Command-line front end for the Huffman text compressor

How to run:
  huffzip -c -f notes.txt -o notes.huff
  huffzip -u -f notes.huff -o notes.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from code_table_io import read_artifact, write_artifact
from huffman_codec import HuffmanError, huffman_compress, huffman_decode
from logging_utils import setup_logging

logger = logging.getLogger(__name__)

COMPRESS = "compress"
DECOMPRESS = "decompress"


@dataclass(frozen=True)
class CompressorConfig:
    input_path: Path
    output_path: Path
    mode: str  # COMPRESS or DECOMPRESS
    encoding: str = "utf-8"
    verbose: bool = False
    log_dir: Optional[Path] = None


# no newline translation on read or write, so '\r\n' and lone '\r' survive

def read_text(path: Path, encoding: str) -> str:
    with path.open("r", encoding=encoding, newline="") as f:
        return f.read()

def write_text(path: Path, content: str, encoding: str) -> None:
    # encode before the file is created so an encoding failure leaves no output behind
    data = content.encode(encoding)
    path.write_bytes(data)


def compress_file(config: CompressorConfig) -> None:
    text = read_text(config.input_path, config.encoding)
    bits, codes = huffman_compress(text)
    write_text(config.output_path, write_artifact(bits, codes), config.encoding)

    logger.info("compressed %s -> %s", config.input_path, config.output_path)
    logger.info("%d symbols, %d distinct, %d bits (%.3f bits/symbol)",
                len(text), len(codes), len(bits), len(bits) / len(text))


def decompress_file(config: CompressorConfig) -> None:
    bits, codes = read_artifact(read_text(config.input_path, config.encoding))
    text = huffman_decode(bits, codes)
    write_text(config.output_path, text, config.encoding)

    logger.info("decompressed %s -> %s (%d symbols)", config.input_path, config.output_path, len(text))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="huffzip",
        description="Compress and decompress text files using Huffman coding",
    )
    ap.add_argument("-f", "--file", required=True, metavar="INPUT", help="Input file path")
    ap.add_argument("-o", "--output", required=True, metavar="OUTPUT", help="Output file path")

    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("-c", "--compress", dest="mode", action="store_const", const=COMPRESS,
                      help="Compress the input file")
    mode.add_argument("-u", "--decompress", dest="mode", action="store_const", const=DECOMPRESS,
                      help="Decompress the input file")

    ap.add_argument("--encoding", default="utf-8", help="Text encoding of input and output files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    ap.add_argument("--log-dir", type=Path, default=None, help="Also write a run log into this directory")
    return ap


def resolve_config(args: argparse.Namespace) -> CompressorConfig:
    return CompressorConfig(
        input_path=Path(args.file),
        output_path=Path(args.output),
        mode=args.mode,
        encoding=args.encoding,
        verbose=args.verbose,
        log_dir=args.log_dir,
    )


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.mode is None:
        ap.print_usage(sys.stderr)
        print("Please specify either --compress (-c) or --decompress (-u).", file=sys.stderr)
        return 2

    config = resolve_config(args)
    setup_logging(__name__, logging.DEBUG if config.verbose else logging.INFO, config.log_dir)

    try:
        if config.mode == COMPRESS:
            compress_file(config)
        else:
            decompress_file(config)
    except (HuffmanError, OSError, UnicodeError) as e:
        logger.error("%s failed: %s", config.mode, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
