from functools import lru_cache
import logging
from pathlib import Path
from typing import Optional

from kgops.remote.graphql_client import GraphQLClient
from kgops.remote.publisher import EditSubmitter, Publisher, TransactionSender

from demos.app.config import AppConfig
from demos.app.loaders.record_loader import load_sample_records
from demos.app.schemas import SampleRecords
from demos.app.services.cleanup_service import CleanupService
from demos.app.services.explore_service import ExploreService
from demos.app.services.publish_service import PublishService


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@lru_cache
def get_graphql_client() -> GraphQLClient:
    return GraphQLClient.from_config(get_config().kgops.client)


def get_sample_records() -> SampleRecords:
    return load_sample_records(Path(get_config().kgops.data.data_dir))


def get_publish_service() -> PublishService:
    config = get_config()
    return PublishService(
        data_config=config.kgops.data,
        space_id=config.kgops.publish.space_id,
    )


def get_cleanup_service() -> CleanupService:
    return CleanupService(get_config().kgops.record)


def get_explore_service() -> ExploreService:
    config = get_config()
    return ExploreService(
        get_graphql_client(),
        demo_space_id=config.kgops.publish.space_id,
    )


def get_publisher(
    *,
    submitter: Optional[EditSubmitter] = None,
    sender: Optional[TransactionSender] = None,
    dry_run: Optional[bool] = None,
) -> Optional[Publisher]:
    """
    Publisher for the configured space, or None for a dry run.

    kgops does not sign or encode edits itself, so without an edit
    submitter and a wallet sender every run is a dry run.
    """
    logger = logging.getLogger("kgops.demo.startup")
    publish_config = get_config().kgops.publish

    if dry_run is None:
        dry_run = publish_config.dry_run
    if dry_run:
        return None
    if submitter is None or sender is None:
        logger.warning("no edit submitter or wallet sender configured; dry run")
        return None
    if not publish_config.space_id:
        logger.warning("DEMO_SPACE_ID not set; dry run")
        return None

    return Publisher.from_config(
        publish_config,
        client=get_graphql_client(),
        submitter=submitter,
        sender=sender,
    )
