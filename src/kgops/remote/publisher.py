from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Protocol, Tuple

from kgops.batch.record import ops_to_records
from kgops.config.settings import PublishConfig
from kgops.errors import AuthorizationError, SpaceNotFoundError, ValidationError
from kgops.graph.ops import Op
from kgops.remote import queries
from kgops.remote.graphql_client import GraphQLClient
from kgops.utils.ids import normalize_id


@dataclass(frozen=True)
class EditResult:
    """
    What the edit submitter hands back: content id, edit id and the
    transaction to send.
    """

    cid: str
    edit_id: str
    to: str
    calldata: str


class EditSubmitter(Protocol):
    """
    Turns an operation list into an edit transaction for a space.

    Ops arrive as JSON-ready records (see kgops.batch.record).
    """

    def publish_personal_edit(
        self,
        *,
        name: str,
        space_id: str,
        ops: List[Dict[str, Any]],
        author: str,
        network: str,
    ) -> EditResult: ...

    def propose_dao_edit(
        self,
        *,
        name: str,
        ops: List[Dict[str, Any]],
        author: str,
        network: str,
        caller_space_id: str,
        dao_space_id: str,
        dao_space_address: str,
    ) -> EditResult: ...


class TransactionSender(Protocol):
    """
    Wallet client that signs and sends a transaction.
    """

    address: str

    def send_transaction(self, *, to: str, data: str) -> str: ...


@dataclass(frozen=True)
class SpaceAuthority:
    space_id: str
    type: str
    address: str | None
    members: Tuple[str, ...]
    editors: Tuple[str, ...]

    @property
    def candidates(self) -> Tuple[str, ...]:
        return self.members + self.editors


class Publisher:
    """
    Publishes a batch to one space.

    Personal spaces take the edit directly. DAO spaces take a proposal,
    which requires the caller's personal space to be a member or editor.
    """

    def __init__(
        self,
        *,
        client: GraphQLClient,
        submitter: EditSubmitter,
        sender: TransactionSender,
        space_id: str,
        network: str = "TESTNET",
    ) -> None:
        self.client = client
        self.submitter = submitter
        self.sender = sender
        self.space_id = normalize_id(space_id)
        self.network = network

    @classmethod
    def from_config(
        cls,
        config: PublishConfig,
        *,
        client: GraphQLClient,
        submitter: EditSubmitter,
        sender: TransactionSender,
    ) -> "Publisher":
        if not config.space_id:
            raise ValidationError("no target space configured")
        return cls(
            client=client,
            submitter=submitter,
            sender=sender,
            space_id=config.space_id,
            network=config.network,
        )

    # ------------------------------------------------------------------
    # Authority
    # ------------------------------------------------------------------

    def space_authority(self) -> SpaceAuthority:
        raw = queries.space_authority(self.client, self.space_id)
        if not raw:
            raise SpaceNotFoundError("space not found", space_id=self.space_id)
        return SpaceAuthority(
            space_id=self.space_id,
            type=raw.get("type") or "",
            address=raw.get("address"),
            members=tuple(m["memberSpaceId"] for m in raw.get("membersList") or []),
            editors=tuple(e["memberSpaceId"] for e in raw.get("editorsList") or []),
        )

    def caller_space_id(self) -> str:
        """
        Personal space owned by the sending wallet.
        """
        address = self.sender.address
        if not address:
            raise AuthorizationError("wallet address not available")
        spaces = queries.spaces_by_address(self.client, address)
        for space in spaces:
            if space.get("type") == "PERSONAL":
                return space["id"]
        raise AuthorizationError(
            "no personal space found for wallet; "
            "make sure this wallet has a personal space on the network",
            address=address,
        )

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def publish(self, ops: Iterable[Op], label: str) -> str:
        logger = logging.getLogger("kgops.publish")
        records = ops_to_records(ops)
        if not records:
            raise ValidationError("nothing to publish")

        logger.info("querying space %s from the API", self.space_id)
        authority = self.space_authority()
        logger.info(
            "space type: %s  address: %s", authority.type, authority.address
        )
        logger.info("publishing %s operations", len(records))

        if authority.type == "PERSONAL":
            result = self.submitter.publish_personal_edit(
                name=label,
                space_id=self.space_id,
                ops=records,
                author=self.space_id,
                network=self.network,
            )
        else:
            caller = self.caller_space_id()
            logger.info("caller personal space: %s", caller)
            if caller not in authority.candidates:
                raise AuthorizationError(
                    "personal space is not a member or editor of the DAO space",
                    caller_space_id=caller,
                    space_id=self.space_id,
                    members=list(authority.members),
                    editors=list(authority.editors),
                )
            if not authority.address:
                raise SpaceNotFoundError(
                    "DAO space has no contract address", space_id=self.space_id
                )
            result = self.submitter.propose_dao_edit(
                name=label,
                ops=records,
                author=caller,
                network=self.network,
                caller_space_id=f"0x{caller}",
                dao_space_id=f"0x{self.space_id}",
                dao_space_address=authority.address,
            )

        logger.info("cid: %s", result.cid)
        logger.info("edit id: %s", result.edit_id)

        tx_hash = self.sender.send_transaction(to=result.to, data=result.calldata)
        logger.info("transaction hash: %s", tx_hash)
        return tx_hash
