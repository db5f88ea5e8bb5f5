from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import render, render_with_toc
from .config import RenderOptions, load_options
from .utils import configure_logging, read_markdown, resolve_output_path, write_html


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notemark",
        description="Convert Markdown into an HTML fragment.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output HTML path")
    parser.add_argument("-c", "--config", type=str, help="YAML file with render options")
    parser.add_argument("--toc", action="store_true", help="Prepend a table of contents")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output)

    options = RenderOptions()
    if args.config:
        logging.info("Loading options from %s", args.config)
        options = load_options(Path(args.config).expanduser())

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Rendering HTML to %s", output_path)
    if args.toc:
        body, toc = render_with_toc(markdown_text, options)
        html = toc + ("\n" if options.pretty and toc else "") + body
    else:
        html = render(markdown_text, options)
    write_html(output_path, html)

    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
