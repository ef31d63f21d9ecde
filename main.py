import argparse
import logging

from parkwatch.config import load_settings
from parkwatch.worker import run_check_once


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def main() -> int:
    parser = argparse.ArgumentParser(
        description="parkwatch: monthly parking vacancy watcher (one check per run, schedule with cron)"
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: auto-discover .env)")
    args = parser.parse_args()

    _setup_logging()
    settings = load_settings(dotenv_path=args.env_file)
    logging.getLogger(__name__).info(
        "Configured interval=%smin email=%s", settings.check_interval_minutes, settings.email_configured
    )

    run_check_once(settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
