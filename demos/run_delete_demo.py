import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kgops.errors import KgopsError  # noqa: E402

from demos.app.dependencies import (  # noqa: E402
    get_cleanup_service,
    get_config,
    get_publisher,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Undo the published sample batch using its persisted record."
    )
    parser.add_argument(
        "--record",
        type=Path,
        default=None,
        help="publish record to reverse (defaults to the configured one)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="compute and persist the compensating batch without publishing",
    )
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger("kgops.run")

    try:
        tx_hash = get_cleanup_service().run(
            record_path=args.record,
            publisher=get_publisher(dry_run=True if args.dry_run else None),
        )
    except KgopsError as exc:
        logger.error("delete demo failed: %s", exc)
        return 1

    if tx_hash:
        logger.info("deleted: %s", tx_hash)
    return 0


if __name__ == "__main__":
    sys.exit(main())
