"""Command-line entry point: multi-ai-chat "Your question here"."""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import Settings, load_settings
from .errors import ConfigError, PreconditionError
from .logger import get_logger, mask_sensitive, setup_logging
from .presenter import render
from .providers import build_provider_specs, run

MIN_PYTHON = (3, 9)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PRECONDITION = 2

log = get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multi-ai-chat",
        description="Query multiple AI providers concurrently and print labeled responses.",
    )
    parser.add_argument("question", nargs="*", help="Question to send to every provider")
    return parser


def check_runtime(log_dir: Path) -> None:
    """Fail fast when the interpreter or filesystem cannot support a run."""
    if sys.version_info < MIN_PYTHON:
        raise PreconditionError(
            f"Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]}+ required. "
            f"Installed version: {sys.version.split()[0]}"
        )
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PreconditionError(f"Cannot create log directory {log_dir}: {e}") from e
    if not os.access(log_dir, os.W_OK):
        raise PreconditionError(f"Log directory {log_dir} is not writable")


def ask(question: str, settings: Settings) -> str:
    """Run every configured provider and return the rendered report."""
    specs = build_provider_specs(settings)
    results = run(question, settings.providers, specs, settings)
    return render(results, question, providers=settings.providers, mask_keys=settings.mask_keys)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    words = list(sys.argv[1:] if argv is None else argv)
    if words in (["-h"], ["--help"]):
        parser.parse_args(words)

    # Every word belongs to the question, including ones that look like options
    args = parser.parse_args(["--", *words])

    question = " ".join(args.question).strip()
    if not question:
        print(f'Usage: {parser.prog} "Your question here"')
        return EXIT_USAGE

    try:
        settings = load_settings()
        check_runtime(settings.log_dir)
    except (ConfigError, PreconditionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_PRECONDITION

    log_path = setup_logging(settings.log_dir, mask_keys=settings.mask_keys)
    log.info(f"Starting multi-ai-chat for question: {mask_sensitive(question, settings.mask_keys)}")
    if settings.config_file is not None:
        log.info(f"Loaded config from {settings.config_file}")

    print(ask(question, settings))
    print()
    log.info(f"multi-ai-chat finished; detailed log: {log_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
