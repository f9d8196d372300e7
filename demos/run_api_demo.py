import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kgops.errors import KgopsError  # noqa: E402
from kgops.utils.serialization import dumps_pretty  # noqa: E402

from demos.app.dependencies import get_config, get_explore_service  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Read-only tour of the knowledge graph API."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="also print every result as JSON",
    )
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger("kgops.run")

    try:
        results = get_explore_service().run_all()
    except KgopsError as exc:
        logger.error("API demo failed: %s", exc)
        return 1

    if args.json:
        print(dumps_pretty(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
