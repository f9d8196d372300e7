from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple

# ---------------------------------------------------------------------
# Remote query service
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class ClientConfig:
    """
    Where the GraphQL API lives and how long to wait for it.
    """

    api_url: str
    timeout_s: float = 30.0


# ---------------------------------------------------------------------
# Publishing
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class PublishConfig:
    """
    Target space and network for publishing a batch.

    The wallet key is passed through untouched to the wallet
    collaborator; kgops never signs anything itself.
    """

    space_id: str | None
    network: Literal["TESTNET", "MAINNET"] = "TESTNET"
    rpc_url: str | None = None
    wallet_key: str | None = field(default=None, repr=False)
    dry_run: bool = True


# ---------------------------------------------------------------------
# Persisted batch records
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class RecordConfig:
    """
    Where publish and cleanup records are written.
    """

    record_dir: str
    publish_record_file: str
    delete_record_file: str


# ---------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class DemoDataConfig:
    """
    Input record files and the entities the showcase blocks point at.
    """

    data_dir: str
    showcase_project: str
    key_people: Tuple[str, ...] = ()


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class KgopsConfig:
    """
    Root configuration object for kgops.

    Constructed explicitly by the application and passed to the
    services that need it.
    """

    client: ClientConfig
    publish: PublishConfig
    record: RecordConfig
    data: DemoDataConfig
