"""Terminal entrypoint for WordWalk."""

from __future__ import annotations

import argparse
import asyncio
import platform
import sys
from typing import Sequence

from word_walk.application.bootstrap import AppServices, initialize_app_services
from word_walk.config import BASE_DIR, AppConfig, load_config
from word_walk.constants import DRILL_MODES, RATE_SPEEDS
from word_walk.logging_config import setup_logging
from word_walk.storage.catalog_repository import CatalogError
from word_walk.ui.console_app import ConsoleApp
from word_walk.utils import resolve_path


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="word-walk",
        description="Speak vocabulary entries aloud: word, synonym and example sentence.",
    )
    parser.add_argument("--catalog", help="Path to the words JSON catalog.")
    parser.add_argument("--group", type=int, help="Group id to start with.")
    parser.add_argument("--rate", choices=sorted(RATE_SPEEDS), help="Speech rate.")
    parser.add_argument("--mode", choices=DRILL_MODES, help="Drill mode.")
    return parser


def _log_startup(config: AppConfig, logger, catalog_path: str) -> None:
    logger.info("Starting app")
    logger.info("Log file: %s", config.log_file)
    logger.debug(
        "Config: LOG_LEVEL=%s FILE_LOG_LEVEL=%s CATALOG=%s REPO_ID=%s VOICE=%s "
        "USE_GPU=%s PREWARM=%s RATE=%s MODE=%s WORD_GAP_MS=%s REVISE_GAP_MS=%s "
        "ENTRY_GAP_MS=%s PAUSE_POLL_MS=%s PLAYBACK_TICK_MS=%s",
        config.log_level,
        config.file_log_level,
        catalog_path,
        config.repo_id,
        config.tts_voice,
        config.tts_use_gpu,
        config.tts_prewarm_enabled,
        config.default_rate,
        config.default_mode,
        config.word_gap_ms,
        config.revise_gap_ms,
        config.entry_gap_ms,
        config.pause_poll_ms,
        config.playback_tick_ms,
    )
    logger.debug("Python version: %s", sys.version.replace("\n", " "))
    logger.debug("Platform: %s", platform.platform())


async def run_console(services: AppServices) -> None:
    await ConsoleApp(services.controller).run()


def launch(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = load_config()
    logger = setup_logging(config)
    # Relative --catalog paths resolve like WORDWALK_CATALOG_PATH, against the project root.
    catalog_path = resolve_path(args.catalog, BASE_DIR) if args.catalog else config.catalog_path
    _log_startup(config, logger, catalog_path)
    try:
        services = initialize_app_services(
            config,
            logger,
            catalog_path=catalog_path,
            group_id=args.group,
            rate=args.rate,
            mode=args.mode,
        )
    except (CatalogError, ValueError) as exc:
        logger.error("Cannot start: %s", exc)
        return 2
    if not services.speech_service.is_available():
        logger.warning("Speech output is unavailable; 'play' will be refused")
    asyncio.run(run_console(services))
    logger.info("Session ended")
    return 0


if __name__ == "__main__":
    sys.exit(launch())
