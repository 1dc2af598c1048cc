import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Settings, configure_logging, load_settings
from .exceptions import PipelineError
from .schemas import CommitOutcome
from .services import run_commit

logger = logging.getLogger(__name__)


def write_outputs(outcome: CommitOutcome, output_path: str) -> None:
    """Append step outputs to the file named by GITHUB_OUTPUT."""
    if not output_path or not outcome.committed:
        return
    with Path(output_path).open("a", encoding="utf-8") as fh:
        fh.write(f"commit-oid={outcome.commit.oid}\n")
        if outcome.commit.url:
            fh.write(f"commit-url={outcome.commit.url}\n")


def report_failure(error: PipelineError) -> None:
    logger.error(error.message)
    if error.detail:
        logger.error(error.detail)


def main(settings: Optional[Settings] = None) -> int:
    """Run the action once; returns the process exit status."""
    if settings is None:
        configure_logging()
        try:
            settings = load_settings()
        except PipelineError as e:
            report_failure(e)
            return 1
    configure_logging(debug=settings.DEBUG, actions=settings.GITHUB_ACTIONS)

    try:
        outcome = asyncio.run(run_commit(settings))
    except PipelineError as e:
        report_failure(e)
        return 1
    except Exception as e:  # noqa: BLE001 - top-level failure report
        logger.exception(f"error: {e}")
        return 1

    write_outputs(outcome, settings.GITHUB_OUTPUT)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
