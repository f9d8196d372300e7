import argparse
import logging
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kgops.errors import KgopsError  # noqa: E402

from demos.app.dependencies import (  # noqa: E402
    get_config,
    get_publish_service,
    get_publisher,
    get_sample_records,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Build the sample batch, persist its record and publish it."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="build and persist the batch without publishing",
    )
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger("kgops.run")
    start = time.perf_counter()

    try:
        records = get_sample_records()
        service = get_publish_service()
        demo = service.build(records)
        publisher = get_publisher(dry_run=True if args.dry_run else None)
        tx_hash = service.publish(
            demo,
            record_config=config.kgops.record,
            publisher=publisher,
        )
    except KgopsError as exc:
        logger.error("publish demo failed: %s", exc)
        return 1

    if tx_hash:
        logger.info("published: %s", tx_hash)
    logger.info("done in %.2fs", time.perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
