import logging
import signal
import sys

from app_config import (
    AppConfigurationError,
    load_app_config,
    log_level,
    resolve_config_path,
    timer_settings_from_config,
)
from notifier import NotifierConfig, NotifierConfigurationError, build_notifier
from pomodoro import PomodoroTimer
from runtime import RuntimeBootstrap, RuntimeEngine


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers() -> None:
    """Turn SIGTERM into a normal exit so the runtime shuts its ticker down."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("pomodoro_app").info("%s received, stopping...", signal_name)
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)


def main() -> int:
    """Run the console pomodoro timer."""
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config()
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", app_config.source_file)
        else:
            logger.info(
                "No config file at %s, using built-in defaults",
                resolve_config_path(),
            )
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    logger.setLevel(log_level(app_config.logging))
    logging.getLogger().setLevel(log_level(app_config.logging))

    try:
        notifier_config = NotifierConfig.from_settings(app_config.notifier)
    except NotifierConfigurationError as error:
        logger.error(f"Notifier configuration error: {error}")
        return 1

    notifier = build_notifier(notifier_config, logger=logging.getLogger("notifier"))

    timer = PomodoroTimer(
        settings=timer_settings_from_config(app_config.timer),
        notifier=notifier,
        tick_interval_seconds=app_config.timer.tick_interval_seconds,
        logger=logging.getLogger("pomodoro"),
    )

    setup_signal_handlers()
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            timer=timer,
            notifier_close=notifier.close if notifier is not None else None,
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
