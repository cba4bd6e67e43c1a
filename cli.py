"""
Compress or decompress a single file with the Huffman container format

How to run:
  python cli.py compress notes.txt            -> notes.bin
  python cli.py decompress notes.bin          -> notes_decompressed.txt
  python cli.py decompress notes.bin -o out.txt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from codec import compress_container, decompress_container
from errors import HuffmanError


def compress_file(path) -> Path:
    path = Path(path)
    output_path = path.with_suffix(".bin")
    output_path.write_bytes(compress_container(path.read_bytes()))
    return output_path

def decompress_file(path, output=None) -> Path:
    path = Path(path)
    output_path = Path(output) if output is not None else path.with_name(path.stem + "_decompressed.txt")
    output_path.write_bytes(decompress_container(path.read_bytes()))
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Huffman file compressor")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_c = sub.add_parser("compress", help="Write <name>.bin next to the input")
    ap_c.add_argument("path", type=str, help="File to compress")

    ap_d = sub.add_parser("decompress", help="Write <name>_decompressed.txt next to the input")
    ap_d.add_argument("path", type=str, help="Container produced by 'compress'")
    ap_d.add_argument("-o", "--output", type=str, default=None, help="Output path (overrides the default name)")

    args = ap.parse_args(argv)

    try:
        if args.command == "compress":
            output_path = compress_file(args.path)
            print("Compressed")
        else:
            output_path = decompress_file(args.path, args.output)
            print("Decompressed")
    except (HuffmanError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
