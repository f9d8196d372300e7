"""
Remote collaborators: the GraphQL query client, canned read queries,
and the publisher that hands a batch to the edit submitter.
"""

from kgops.remote.graphql_client import GraphQLClient
from kgops.remote.publisher import (
    EditResult,
    EditSubmitter,
    TransactionSender,
    SpaceAuthority,
    Publisher,
)

__all__ = [
    "GraphQLClient",
    "EditResult",
    "EditSubmitter",
    "TransactionSender",
    "SpaceAuthority",
    "Publisher",
]
