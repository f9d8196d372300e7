from __future__ import annotations

from typing import Any, Callable, Dict, List

import pytest
import requests

from kgops.config.settings import DemoDataConfig, RecordConfig
from kgops.ontology.media import UploadedMedia
from kgops.remote.graphql_client import GraphQLClient
from kgops.remote.publisher import EditResult

from demos.app.schemas import PersonRecord, ProjectRecord, SampleRecords, TopicRecord

_INVALID_JSON = object()

WALLET_ADDRESS = "0x" + "12" * 20
DAO_ADDRESS = "0x" + "ab" * 20


class FakeResponse:
    def __init__(
        self,
        payload: Any = None,
        *,
        status_code: int = 200,
        reason: str = "OK",
    ) -> None:
        self._payload = payload
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is _INVALID_JSON:
            raise ValueError("not JSON")
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session. The handler receives the query text
    and returns a data dict, a FakeResponse, or an exception to raise.
    """

    def __init__(self, handler: Callable[[str], Any]) -> None:
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        result = self.handler(json["query"])
        if isinstance(result, Exception):
            raise result
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse({"data": result})

    def close(self) -> None:
        self.closed = True


class FakeSubmitter:
    def __init__(self) -> None:
        self.personal: List[Dict[str, Any]] = []
        self.proposals: List[Dict[str, Any]] = []

    def _result(self) -> EditResult:
        return EditResult(
            cid="ipfs://bafyfakecid",
            edit_id="edit-1",
            to=DAO_ADDRESS,
            calldata="0xdeadbeef",
        )

    def publish_personal_edit(self, **kwargs) -> EditResult:
        self.personal.append(kwargs)
        return self._result()

    def propose_dao_edit(self, **kwargs) -> EditResult:
        self.proposals.append(kwargs)
        return self._result()


class FakeSender:
    address = WALLET_ADDRESS

    def __init__(self) -> None:
        self.sent: List[Dict[str, str]] = []

    def send_transaction(self, *, to: str, data: str) -> str:
        self.sent.append({"to": to, "data": data})
        return "0x" + "f" * 64


class FakeUploader:
    def __init__(self) -> None:
        self.urls: List[str] = []

    def upload(self, url: str) -> UploadedMedia:
        self.urls.append(url)
        return UploadedMedia(location=f"ipfs://bafy{len(self.urls)}", width=64, height=32)


# ---------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------


@pytest.fixture()
def make_client() -> Callable[[Callable[[str], Any]], GraphQLClient]:
    def _make(handler: Callable[[str], Any]) -> GraphQLClient:
        return GraphQLClient(
            "https://api.example.test/graphql",
            timeout_s=5.0,
            session=FakeSession(handler),
        )

    return _make


@pytest.fixture()
def submitter() -> FakeSubmitter:
    return FakeSubmitter()


@pytest.fixture()
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture()
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture()
def sample_records() -> SampleRecords:
    return SampleRecords(
        topics=[
            TopicRecord(name="Blockchain", description="Distributed ledgers."),
            TopicRecord(name="Cryptography", description="Secure communication."),
            TopicRecord(name="Decentralized Finance", description="On-chain finance."),
        ],
        people=[
            PersonRecord(
                name="Vitalik Buterin",
                description="Co-founder of Ethereum.",
                web_url="https://vitalik.eth.limo",
                birth_date="1994-01-31",
                topics=["Blockchain", "Decentralized Finance"],
            ),
            PersonRecord(
                name="Satoshi Nakamoto",
                description="Author of the Bitcoin white paper.",
                topics=["Blockchain", "Unknown Topic"],
            ),
        ],
        projects=[
            ProjectRecord(
                name="Ethereum",
                description="Smart contract platform.",
                web_url="https://ethereum.org",
                date_founded="2015-07-30",
                topics=["Blockchain"],
                avatar_url="https://ethereum.org/logo.png",
                blocks=["## Overview", "Runs smart contracts.", "Uses ether."],
            ),
            ProjectRecord(
                name="Bitcoin",
                description="Peer-to-peer cash.",
                topics=["Cryptography"],
            ),
        ],
    )


@pytest.fixture()
def data_config() -> DemoDataConfig:
    return DemoDataConfig(
        data_dir="data_to_publish",
        showcase_project="Ethereum",
        key_people=("Vitalik Buterin", "Satoshi Nakamoto"),
    )


@pytest.fixture()
def record_config(tmp_path) -> RecordConfig:
    return RecordConfig(
        record_dir=str(tmp_path / "records"),
        publish_record_file="publish_ops.txt",
        delete_record_file="delete_ops.txt",
    )


@pytest.fixture()
def connection_error() -> Exception:
    return requests.exceptions.ConnectionError("connection refused")


@pytest.fixture()
def http_response() -> Callable[..., FakeResponse]:
    def _make(payload: Any = None, *, status_code: int = 200, reason: str = "OK"):
        return FakeResponse(payload, status_code=status_code, reason=reason)

    return _make


@pytest.fixture()
def invalid_json_response() -> FakeResponse:
    return FakeResponse(_INVALID_JSON)
