"""
Pytest tests for the explorerd FastAPI server: auth gate, routing, decoding,
error mapping. Backends are the seeded in-memory node wrapped in spies.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from doubles import API_PASSWORD, backend_calls, basic_auth_header
from explorerd.api_server.server import create_app
from explorerd.capabilities.memory import MemoryExplorer
from explorerd.types import ChainIndex, Transaction
from factories import (
    ALICE,
    ALICE_SC_1,
    ALICE_SC_2,
    ALICE_SF,
    BOB,
    CAROL,
    CONTRACT,
    TXN_1,
    TXN_2,
    TXN_3,
    UNKNOWN_ELEMENT_ID,
    chain_index,
    rejected_transaction,
    seed_explorer,
    transaction,
)


def _txn_json(txn: Transaction) -> dict:
    return txn.model_dump(mode="json", by_alias=True)


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


def test_any_username_with_correct_password_is_accepted(app):
    c = TestClient(app, headers=basic_auth_header("somebody-else", API_PASSWORD))
    r = c.get("/syncer/peers")
    assert r.status_code == 200


def test_wrong_password_rejected_before_backend(app, spies):
    c = TestClient(app, headers=basic_auth_header("anyone", "wrong"))
    r = c.get("/explorer/address/%s/balance" % ALICE)
    assert r.status_code == 401
    assert backend_calls(spies) == []


def test_missing_credentials_rejected(anon_client, spies):
    r = anon_client.post("/txpool/broadcast", json={"transaction": _txn_json(transaction("t"))})
    assert r.status_code == 401
    assert r.headers["www-authenticate"].startswith("Basic")
    assert backend_calls(spies) == []


def test_password_may_contain_colons(node):
    app = create_app(
        chain_manager=node.chain,
        syncer=node.syncer,
        txpool=node.txpool,
        explorer=node.explorer,
        password="pa:ss:word",
    )
    ok = TestClient(app, headers=basic_auth_header("user", "pa:ss:word"))
    assert ok.get("/syncer/peers").status_code == 200
    truncated = TestClient(app, headers=basic_auth_header("user", "pa"))
    assert truncated.get("/syncer/peers").status_code == 401


@pytest.mark.parametrize(
    "header",
    # bm9jb2xvbg== is base64 of "nocolon"
    ["Basic !!!not-base64", "Bearer abc", "Basic bm9jb2xvbg==", ""],
)
def test_malformed_authorization_rejected(app, spies, header):
    c = TestClient(app, headers={"Authorization": header})
    r = c.get("/syncer/peers")
    assert r.status_code == 401
    assert backend_calls(spies) == []


# -----------------------------------------------------------------------------
# Chain
# -----------------------------------------------------------------------------


def test_chain_stats_tip_uses_latest(client, spies):
    r = client.get("/explorer/chain/tip")
    assert r.status_code == 200
    assert r.json()["block"]["height"] == 2
    assert spies["explorer"].called("chain_stats_latest") == [()]
    assert spies["explorer"].called("chain_stats") == []


def test_chain_stats_at_index(client, spies):
    index = chain_index(1)
    r = client.get(f"/explorer/chain/{index}")
    assert r.status_code == 200
    assert r.json()["spentSiacoinsCount"] == 4
    assert spies["explorer"].called("chain_stats") == [(index,)]


def test_chain_stats_bad_index_is_client_error(client, spies):
    r = client.get("/explorer/chain/12")
    assert r.status_code == 400
    assert "index" in r.json()["detail"]
    assert backend_calls(spies) == []


def test_chain_stats_unknown_index_not_found(client):
    r = client.get(f"/explorer/chain/{chain_index(7)}")
    assert r.status_code == 404
    assert r.json()["detail"].startswith("failed to load chain stats")


def test_chain_state_tip_uses_chain_manager(client, spies):
    r = client.get("/explorer/chain/tip/state")
    assert r.status_code == 200
    assert r.json()["index"]["height"] == 0
    assert spies["chain"].called("tip_state") == [()]
    assert spies["explorer"].called("state") == []


def test_chain_state_at_index(client):
    r = client.get(f"/explorer/chain/{chain_index(1)}/state")
    assert r.status_code == 200
    body = r.json()
    assert ChainIndex.model_validate(body["index"]) == chain_index(1)
    assert body["totalWork"] == "1000"


# -----------------------------------------------------------------------------
# Elements
# -----------------------------------------------------------------------------


def test_search_siacoin(client):
    r = client.get(f"/explorer/element/search/{ALICE_SC_1.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "siacoin"
    assert body["siacoinElement"]["id"] == ALICE_SC_1.id
    assert "siafundElement" not in body
    assert "fileContractElement" not in body


def test_search_siafund_and_contract(client):
    sf = client.get(f"/explorer/element/search/{ALICE_SF.id}").json()
    assert sf["type"] == "siafund"
    assert sf["siafundElement"]["siafundOutput"]["value"] == 3
    fc = client.get(f"/explorer/element/search/{CONTRACT.id}").json()
    assert fc["type"] == "contract"
    assert fc["fileContractElement"]["fileContract"]["windowEnd"] == 144


def test_search_unknown_is_empty_result(client):
    r = client.get(f"/explorer/element/search/{UNKNOWN_ELEMENT_ID}")
    assert r.status_code == 200
    assert r.json() == {"type": "none"}


def test_search_malformed_id(client, spies):
    r = client.get("/explorer/element/search/not-an-element")
    assert r.status_code == 400
    assert backend_calls(spies) == []


def test_siacoin_element_direct(client):
    r = client.get(f"/explorer/element/siacoin/{ALICE_SC_1.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["siacoinOutput"] == {"value": "100", "address": ALICE}
    assert body["leafIndex"] == 10


def test_element_id_prefix_optional(client):
    bare = ALICE_SC_1.id.removeprefix("elem:")
    r = client.get(f"/explorer/element/siacoin/{bare}")
    assert r.status_code == 200
    assert r.json()["id"] == ALICE_SC_1.id


def test_direct_lookup_not_found_is_client_visible(client):
    r = client.get(f"/explorer/element/siafund/{ALICE_SC_1.id}")
    assert r.status_code == 404
    assert r.json()["detail"].startswith("failed to load siafund element")
    r = client.get(f"/explorer/element/contract/{UNKNOWN_ELEMENT_ID}")
    assert r.status_code == 404


# -----------------------------------------------------------------------------
# Transactions and addresses
# -----------------------------------------------------------------------------


def test_transaction_by_id(client):
    r = client.get(f"/explorer/transaction/{TXN_1.id}")
    assert r.status_code == 200
    assert Transaction.model_validate(r.json()) == TXN_1
    assert r.json()["minerFee"] == "1"


def test_transaction_unknown_and_malformed(client):
    assert client.get(f"/explorer/transaction/txid:{'ab' * 32}").status_code == 404
    assert client.get("/explorer/transaction/txid:xyz").status_code == 400


def test_address_balance(client):
    r = client.get(f"/explorer/address/{ALICE}/balance")
    assert r.status_code == 200
    assert r.json() == {"siacoins": "350", "siafunds": 3}


def test_address_balance_malformed_address(client, spies):
    r = client.get("/explorer/address/addr:1234/balance")
    assert r.status_code == 400
    assert r.json()["detail"].startswith("failed to decode param 'address'")
    assert backend_calls(spies) == []


def test_address_siacoins(client):
    r = client.get(f"/explorer/address/{ALICE}/siacoins")
    assert r.json() == [ALICE_SC_1.id, ALICE_SC_2.id]


def test_address_siafunds_routes_to_siafund_lookup(client, spies):
    """Regression: the single-address siafunds route must not serve siacoin IDs."""
    r = client.get(f"/explorer/address/{ALICE}/siafunds")
    assert r.status_code == 200
    assert r.json() == [ALICE_SF.id]
    assert spies["explorer"].called("unspent_siafund_elements") == [(ALICE,)]
    assert spies["explorer"].called("unspent_siacoin_elements") == []


def test_address_transactions_amount_and_offset(client, spies):
    r = client.get(f"/explorer/address/{ALICE}/transactions", params={"amount": 1, "offset": 1})
    assert r.status_code == 200
    assert r.json() == [TXN_2.id]
    assert spies["explorer"].called("transactions") == [(ALICE, 1, 1)]


def test_address_transactions_defaults(client, spies):
    r = client.get(f"/explorer/address/{ALICE}/transactions")
    assert r.json() == [TXN_3.id, TXN_2.id, TXN_1.id]
    assert spies["explorer"].called("transactions") == [(ALICE, 100, 0)]


def test_address_transactions_large_amount_reaches_backend(client, spies):
    r = client.get(f"/explorer/address/{ALICE}/transactions", params={"amount": 1000, "offset": 0})
    assert r.status_code == 200
    assert r.json() == [TXN_3.id, TXN_2.id, TXN_1.id]
    assert spies["explorer"].called("transactions") == [(ALICE, 1000, 0)]


def test_address_transactions_bad_query(client, spies):
    r = client.get(f"/explorer/address/{ALICE}/transactions", params={"offset": -1})
    assert r.status_code == 400
    assert r.json()["detail"].startswith("failed to decode request")
    assert backend_calls(spies) == []


# -----------------------------------------------------------------------------
# Batch
# -----------------------------------------------------------------------------


def test_batch_balance(client):
    r = client.post("/explorer/batch/addresses/balance", json=[BOB, CAROL, ALICE])
    assert r.status_code == 200
    assert r.json() == [
        {"siacoins": "7", "siafunds": 5},
        {"siacoins": "0", "siafunds": 0},
        {"siacoins": "350", "siafunds": 3},
    ]


def test_batch_siacoins(client):
    r = client.post("/explorer/batch/addresses/siacoins", json=[CAROL, ALICE])
    assert r.status_code == 200
    body = r.json()
    assert body[0] == []
    assert [e["id"] for e in body[1]] == [ALICE_SC_1.id, ALICE_SC_2.id]


def test_batch_siafunds_routes_to_siafund_lookup(client, spies):
    """Regression: the siafunds batch must return siafund elements, not siacoin ones."""
    r = client.post("/explorer/batch/addresses/siafunds", json=[ALICE])
    assert r.status_code == 200
    body = r.json()
    assert [e["id"] for e in body[0]] == [ALICE_SF.id]
    assert "siafundOutput" in body[0][0]
    called = {name for name, _ in spies["explorer"].calls}
    assert called == {"unspent_siafund_elements", "siafund_element"}


def test_batch_transactions(client):
    r = client.post(
        "/explorer/batch/addresses/transactions",
        json=[
            {"address": ALICE, "amount": 2, "offset": 0},
            {"address": CAROL},
            {"address": BOB, "amount": 5, "offset": 0},
        ],
    )
    assert r.status_code == 200
    body = [[Transaction.model_validate(t) for t in txns] for txns in r.json()]
    assert body == [[TXN_3, TXN_2], [], [TXN_2]]


def test_batch_transactions_large_amount_reaches_backend(client, spies):
    r = client.post(
        "/explorer/batch/addresses/transactions",
        json=[{"address": ALICE, "amount": 1000, "offset": 0}],
    )
    assert r.status_code == 200
    assert len(r.json()[0]) == 3
    assert spies["explorer"].called("transactions") == [(ALICE, 1000, 0)]


def test_batch_malformed_body(client, spies):
    r = client.post("/explorer/batch/addresses/balance", json=[ALICE, "addr:nope"])
    assert r.status_code == 400
    assert backend_calls(spies) == []


def test_batch_backend_failure_returns_no_partial_result(node):
    class BrokenForBob(MemoryExplorer):
        def siacoin_balance(self, address):
            if address == BOB:
                raise RuntimeError("balance index corrupted")
            return super().siacoin_balance(address)

    explorer = BrokenForBob()
    seed_explorer(explorer)
    app = create_app(node.chain, node.syncer, node.txpool, explorer, password=API_PASSWORD)
    c = TestClient(app, headers=basic_auth_header("", API_PASSWORD))
    r = c.post("/explorer/batch/addresses/balance", json=[ALICE, BOB, CAROL])
    assert r.status_code == 500
    assert r.json() == {"detail": "failed to get siacoin balance: balance index corrupted"}


# -----------------------------------------------------------------------------
# Transaction pool and syncer
# -----------------------------------------------------------------------------


def test_broadcast_admits_dependencies_then_transaction(client, node):
    d1, d2, t = transaction("d1"), transaction("d2"), transaction("t")
    r = client.post(
        "/txpool/broadcast",
        json={"dependsOn": [_txn_json(d1), _txn_json(d2)], "transaction": _txn_json(t)},
    )
    assert r.status_code == 204
    assert node.txpool.transactions() == [d1, d2, t]
    assert node.syncer.broadcasts == [(t, [d1, d2])]

    listed = client.get("/txpool/transactions").json()
    assert [Transaction.model_validate(x).id for x in listed] == [d1.id, d2.id, t.id]


def test_broadcast_rejected_dependency(client, node, spies):
    d1, d2, t = transaction("d1"), rejected_transaction("d2"), transaction("t")
    r = client.post(
        "/txpool/broadcast",
        json={"dependsOn": [_txn_json(d1), _txn_json(d2)], "transaction": _txn_json(t)},
    )
    assert r.status_code == 400
    assert "couldn't add transaction dependency" in r.json()["detail"]
    assert spies["syncer"].called("broadcast_transaction") == []

    pooled = [Transaction.model_validate(x) for x in client.get("/txpool/transactions").json()]
    assert d1 in pooled
    assert t not in pooled


def test_broadcast_malformed_body(client, spies):
    r = client.post("/txpool/broadcast", json={"transaction": {"minerFee": "-5"}})
    assert r.status_code == 400
    assert backend_calls(spies) == []


def test_syncer_peers_and_address(client):
    assert client.get("/syncer/peers").json() == [{"netAddress": "10.0.0.1:9981"}]
    assert client.get("/syncer/address").json() == "127.0.0.1:9981"


def test_syncer_connect(client, node):
    r = client.post("/syncer/connect", json="10.0.0.2:9981")
    assert r.status_code == 204
    assert "10.0.0.2:9981" in node.syncer.peers()


def test_syncer_connect_failure(client):
    r = client.post("/syncer/connect", json="not-an-address")
    assert r.status_code == 400
    assert r.json()["detail"].startswith("failed to connect to peer")


# -----------------------------------------------------------------------------
# OpenAPI
# -----------------------------------------------------------------------------


def test_openapi_documents_wire_fields(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    text = r.text
    assert "Unspent siacoins in hastings (decimal string)" in text
    assert "Number of newest transactions to skip" in text
    assert "Number of newest transaction IDs to skip" in text
