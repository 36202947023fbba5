from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path

from quotebar.config import AppConfig, StorageBackend, load_or_default
from quotebar.core.errors import ConfigurationError
from quotebar.interfaces import QuoteCommands, QuoteView, TelegramBotInterface
from quotebar.runtime import FileBlobStore, MemoryBlobStore, QuoteController, QuoteStateStore, RotationScheduler
from quotebar.runtime.store import BlobStore
from quotebar.telemetry import configure_logging, default_storage


def main() -> None:
    project_root = Path(__file__).resolve().parents[1]
    config = load_or_default(project_root / "config")

    telemetry_cfg = config.telemetry
    logger = configure_logging(log_dir=project_root / telemetry_cfg.log_dir, level=telemetry_cfg.log_level)
    logger.info("Bootstrapping quotebar", extra={"storage": config.storage.backend.value})

    store = QuoteStateStore(
        _build_backend(config, project_root),
        key=config.storage.key,
        logger=logger.getChild("store"),
    )
    controller = QuoteController(
        store,
        telemetry=default_storage(project_root / telemetry_cfg.events_dir),
        logger=logger.getChild("controller"),
    )
    controller.subscribe(_log_render(logger.getChild("render")))
    controller.launch(seed_quotes=config.quotes.seed)

    scheduler = RotationScheduler(
        controller.tick,
        period_sec=config.scheduler.tick_interval_sec,
        wake_threshold_sec=config.scheduler.wake_threshold_sec,
        logger=logger.getChild("scheduler"),
    )

    try:
        if config.telegram.enabled:
            commands = QuoteCommands(controller, timezone_name=telemetry_cfg.timezone)
            bot = TelegramBotInterface(
                token=config.telegram.bot_token or "",
                chat_id=config.telegram.chat_id or 0,
                commands=commands,
                logger=logger.getChild("telegram"),
            )
            scheduler.start()
            bot.run()
        else:
            def _request_stop(signum: int, _: object) -> None:
                logger.info("Received signal", extra={"signal": signum})
                scheduler.stop(timeout=None)

            signal.signal(signal.SIGINT, _request_stop)
            signal.signal(signal.SIGTERM, _request_stop)
            scheduler.run_forever()
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
    finally:
        scheduler.stop()
        logger.info("Shutdown complete")


def _build_backend(config: AppConfig, project_root: Path) -> BlobStore:
    if config.storage.backend is StorageBackend.MEMORY:
        return MemoryBlobStore()
    return FileBlobStore((project_root / config.storage.directory).resolve())


def _log_render(logger: logging.Logger):
    def render(view: QuoteView) -> None:
        logger.info(
            view.title,
            extra={
                "position": view.current_position,
                "quote_count": view.quote_count,
                "interval": view.interval_label,
            },
        )

    return render


if __name__ == "__main__":
    try:
        main()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise
