"""CLI tests: both services and the file queue against a temp data dir."""

import json
import re

import pytest
from click.testing import CliRunner

from warehouse.infrastructure.cli.main import cli

UUID_RE = re.compile(r"Product ([0-9a-f-]{36}) ")


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(
            cli, ["--data-dir", str(tmp_path), "--log-level", "ERROR", *args]
        )

    return _run


def _created_id(result) -> str:
    return UUID_RE.search(result.output).group(1)


def test_full_round_trip_through_replica(run, tmp_path):
    added = run("product", "add", "--code", "ABCDEFGH")
    assert added.exit_code == 0, added.output
    product_id = _created_id(added)

    assert run("stock", "add", "--id", product_id).exit_code == 0
    stocked = run("stock", "add", "--id", product_id)
    assert "stock is now 2" in stocked.output

    synced = run("replica", "sync")
    assert synced.exit_code == 0
    assert "product-created-events: 1 applied, 0 dead-lettered" in synced.output
    assert "product-updated-events: 2 applied, 0 dead-lettered" in synced.output

    shown = run("replica", "show", "--id", product_id)
    assert "code=ABCDEFGH  stock=2" in shown.output

    replica = json.loads((tmp_path / "query" / "products.json").read_text())
    assert replica == [{"id": product_id, "code": "ABCDEFGH", "stock": 2}]


def test_invalid_code_fails(run):
    result = run("product", "add", "--code", "123")
    assert result.exit_code == 1
    assert "Code must be exactly 8 characters" in result.output


def test_duplicate_code_fails(run):
    run("product", "add", "--code", "ABCDEFGH")
    result = run("product", "add", "--code", "ABCDEFGH")
    assert result.exit_code == 1
    assert "A product with code 'ABCDEFGH' already exists" in result.output


def test_remove_stock_at_zero_fails(run):
    product_id = _created_id(run("product", "add", "--code", "ABCDEFGH"))
    result = run("stock", "remove", "--id", product_id)
    assert result.exit_code == 1
    assert "Cannot remove stock when stock level is zero" in result.output


def test_delete_with_stock_fails_then_succeeds(run):
    product_id = _created_id(run("product", "add", "--code", "ABCDEFGH"))
    run("stock", "add", "--id", product_id)

    assert run("product", "delete", "--id", product_id).exit_code == 1

    run("stock", "remove", "--id", product_id)
    deleted = run("product", "delete", "--id", product_id)
    assert deleted.exit_code == 0
    assert "No products found." in run("product", "list").output


def test_unknown_product_is_not_found(run):
    result = run("stock", "add", "--id", "00000000-0000-0000-0000-000000000000")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_seed_only_fills_empty_store(run):
    first = run("product", "seed")
    assert first.output.count("created") == 2
    assert "nothing seeded" in run("product", "seed").output

    listed = run("product", "list").output
    assert "12345678" in listed
    assert "ABCDEFGH" in listed


def test_dead_letters_are_listed(run, tmp_path):
    queue = tmp_path / "queues" / "product-created-events.jsonl"
    queue.parent.mkdir(parents=True)
    queue.write_text(
        json.dumps(
            {
                "type": "ProductCreated",
                "id": "6f1c2d7e-5b0a-4c8e-9a51-3d1f0e2b7c44",
                "code": "123",
            }
        )
        + "\n"
    )

    synced = run("replica", "sync")
    assert "1 dead-lettered" in synced.output

    letters = run("replica", "dead-letters")
    assert "Code must be exactly 8 characters" in letters.output
    assert "No products found." in run("replica", "list").output


def test_code_reused_after_delete_is_replicated_on_redeliver(run):
    first_id = _created_id(run("product", "add", "--code", "ABCDEFGH"))
    assert run("product", "delete", "--id", first_id).exit_code == 0
    second_id = _created_id(run("product", "add", "--code", "ABCDEFGH"))

    # Created events are applied before deletes, so the second create
    # still collides with the first product in the replica.
    synced = run("replica", "sync")
    assert "product-created-events: 1 applied, 1 dead-lettered" in synced.output
    assert "product-deleted-events: 1 applied, 0 dead-lettered" in synced.output

    redelivered = run("replica", "redeliver")
    assert redelivered.exit_code == 0, redelivered.output
    assert "product-created-events: 1 applied, 0 still dead-lettered" in redelivered.output

    shown = run("replica", "show", "--id", second_id)
    assert "code=ABCDEFGH  stock=0" in shown.output
    assert "No dead letters." in run("replica", "dead-letters").output
