DEFAULTS = {
    # GraphQL endpoint of the knowledge graph API
    "API_URL": "https://testnet-api.geobrowser.io/graphql",
    # Per-request timeout for the API (seconds)
    "HTTP_TIMEOUT_S": 30.0,
    # Network the edits are submitted to
    "NETWORK": "TESTNET",
    # RPC endpoint handed to the wallet collaborator
    "RPC_URL": "https://rpc-geo-test-zc16z3tcvf.t.conduit.xyz",
    # Build and persist batches without publishing them
    "DRY_RUN": True,
    # Directory holding topics.json, people.json and projects.json
    "DATA_DIR": "data_to_publish",
    # Directory for persisted batch records
    "RECORD_DIR": "data_to_delete",
    # Record of the published sample batch (read back by the delete demo)
    "PUBLISH_RECORD_FILE": "demo_publish_ops.txt",
    # Record of the compensating batch
    "DELETE_RECORD_FILE": "delete_ops_output.txt",
    # Project that receives the query and collection data blocks
    "SHOWCASE_PROJECT": "Ethereum",
    # People listed in the collection data block, in order
    "KEY_PEOPLE": ["Vitalik Buterin", "Satoshi Nakamoto"],
    # Logging level for the demo scripts
    "LOG_LEVEL": "INFO",
}
