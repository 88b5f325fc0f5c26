from __future__ import annotations

import argparse
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from lxbread.config.loader import ConfigError, DecoderConfig, resolve_config
from lxbread.fcs.errors import LxbError
from lxbread.fcs.output import RowWriter, format_header
from lxbread.fcs.reader import decode_buffer, read_lxb_file
from lxbread.logging.error_log import ErrorLogBuffer
from lxbread.logging.init import log_summary, set_level, setup_logging
from lxbread.models.processing_result import ProcessingResult
from lxbread.services.orchestrator import ProcessingError, process_all, scan_lxb_files
from lxbread.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load config (``--config`` or ``./lxbread.yml``, defaults otherwise)
- Collect input files (arguments, else the configured input directory)
- Decode each file, writing the table to stdout (or ``--output``)
- Log a SUMMARY line and return the exit code
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

INSPECT_ROWS = 5

USAGE = "usage: lxbread file1 [file2 ..]"


@contextmanager
def _open_output(path: Path | None) -> Iterator[TextIO]:
    if path is None:
        yield sys.stdout
        return
    with path.open("w", encoding="utf-8", newline="\n") as f:
        yield f


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="lxbread",
        description="Decode LXB (FCS3.0 list mode) files into tab separated text",
    )
    p.add_argument("files", nargs="*", type=Path, help="LXB files to decode")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("-o", "--output", type=Path, default=None, help="Write the table here instead of stdout")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect", action="store_true", help="Print channel header & first rows of each file then exit")
    return p.parse_args(argv)


def _collect_files(args: argparse.Namespace, cfg: DecoderConfig) -> list[Path]:
    if args.files:
        return list(args.files)
    if cfg.input_directory:
        return scan_lxb_files(Path(cfg.input_directory), cfg.file_suffix)
    return []


def _inspect_files(files: list[Path], stream: TextIO) -> int:
    """Print each file's channel header and a short DataFrame preview."""
    logger = logging.getLogger("lxbread")
    ok = False
    for f in files:
        print(f"FILE: {f.name}", file=stream)
        try:
            decoded = decode_buffer(read_lxb_file(f))
        except (OSError, LxbError) as e:
            logger.error(f"{f.name}: {e}")
            continue
        print(f"  channels: {format_header(decoded.metadata, decoded.parameter_count)}", file=stream)
        print(f"  events: {decoded.event_count}", file=stream)
        preview = decoded.to_dataframe().head(INSPECT_ROWS)
        print(preview.to_string(index=False), file=stream)
        ok = True
    return EXIT_SUCCESS if ok else EXIT_FAILURE


def _log_file_stats(result: ProcessingResult) -> None:
    """Per-file breakdown of the run, visible with --debug."""
    logger = logging.getLogger("lxbread")
    for stat in result.file_stats or []:
        line = (
            f"stat file={stat.file_name} status={stat.status} parameters={stat.parameters} "
            f"rows={stat.rows} warnings={stat.warnings} elapsed_sec={stat.elapsed_seconds:.6f}"
        )
        if stat.error_type:
            line += f" error_type={stat.error_type}"
        logger.debug(line)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FAILURE

    try:
        files = _collect_files(args, cfg)
    except ProcessingError as e:
        logger.error(f"input: {e}")
        return EXIT_FAILURE

    if not files:
        print(USAGE, file=sys.stderr)
        return EXIT_FAILURE

    if args.inspect:
        return _inspect_files(files, sys.stdout)

    error_log = ErrorLogBuffer(Path(cfg.log_directory))
    with _open_output(args.output) as stream:
        writer = RowWriter(stream, header_prefix=cfg.header_prefix)
        result = process_all(files, writer, error_log)

    _log_file_stats(result)

    if len(error_log) > 0:
        counts = ", ".join(f"{k}={v}" for k, v in error_log.counts_by_type().items())
        logger.info(f"failures by type: {counts}")

    if cfg.write_error_log:
        try:
            path = error_log.flush()
        except OSError as e:
            logger.warning(f"could not write error log: {e}")
        else:
            if path is not None:
                logger.info(f"error log written: {path}")

    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    return EXIT_SUCCESS if result.any_success else EXIT_FAILURE
