import json
import threading
from pathlib import Path

import pytest

from ledger.domain.transaction import Transaction
from ledger.errors import (
    DeserializationError,
    DirectoryCreationError,
    PathResolutionError,
    ReadError,
    SerializationError,
    WriteError,
)
from ledger.repositories.json_file_store import JsonFileStore
from ledger.repositories.json_transaction_store import JsonTransactionStore


def make_store(data_dir: Path | None) -> JsonTransactionStore:
    return JsonTransactionStore(directory_provider=lambda: data_dir)


def make_tx(
    *,
    id: str = "1",
    description: str = "Coffee",
    amount: float = -4.50,
    transaction_type: str = "expense",
    category: str = "Food",
    account: str = "Checking",
    month: str = "2024-01",
    date: str = "2024-01-15",
) -> Transaction:
    return Transaction(
        id=id,
        description=description,
        amount=amount,
        transaction_type=transaction_type,
        category=category,
        account=account,
        month=month,
        date=date,
    )


def test_save_then_load_coffee_scenario(tmp_path):
    store = make_store(tmp_path)
    tx = make_tx()

    store.save([tx])
    loaded = store.load()

    assert loaded == [tx]
    assert loaded[0].amount == -4.50


def test_load_returns_empty_when_file_missing(tmp_path):
    store = make_store(tmp_path)
    assert store.load() == []
    assert not (tmp_path / "transactions.json").exists()


def test_round_trip_keeps_order_and_duplicate_ids(tmp_path):
    store = make_store(tmp_path)
    txs = [
        make_tx(id="b", amount=1200.0, transaction_type="income", category="Salary"),
        make_tx(id="a", description="Rent", amount=-650.0),
        make_tx(id="a", description="Rent again", amount=-650.0),
    ]

    store.save(txs)

    assert store.load() == txs


def test_round_trip_empty_collection(tmp_path):
    store = make_store(tmp_path)
    store.save([make_tx()])
    store.save([])

    assert store.load() == []
    assert json.loads((tmp_path / "transactions.json").read_text(encoding="utf-8")) == []


def test_save_overwrites_previous_collection(tmp_path):
    store = make_store(tmp_path)
    a = [make_tx(id="a1"), make_tx(id="a2")]
    b = [make_tx(id="b1", description="Bus", amount=-2.0)]

    store.save(a)
    store.save(b)

    assert store.load() == b


def test_save_creates_missing_directories(tmp_path):
    data_dir = tmp_path / "deep" / "nested" / "familyledger"
    store = make_store(data_dir)

    store.save([make_tx()])

    assert data_dir.is_dir()
    assert (data_dir / "transactions.json").is_file()


def test_file_is_pretty_printed_with_named_fields(tmp_path):
    store = make_store(tmp_path)
    store.save([make_tx()])

    raw = (tmp_path / "transactions.json").read_text(encoding="utf-8")
    assert raw.startswith("[\n  {\n")
    assert raw.endswith("\n")

    record = json.loads(raw)[0]
    assert list(record) == [
        "id",
        "description",
        "amount",
        "transaction_type",
        "category",
        "account",
        "month",
        "date",
    ]
    assert record["amount"] == -4.5


def test_saving_same_collection_twice_gives_same_bytes(tmp_path):
    store = make_store(tmp_path)
    txs = [make_tx(description="Café crème"), make_tx(id="2", amount=10)]

    store.save(txs)
    first = (tmp_path / "transactions.json").read_bytes()
    store.save(txs)

    assert (tmp_path / "transactions.json").read_bytes() == first
    assert "Café crème" in first.decode("utf-8")


def test_no_tmp_file_left_after_save(tmp_path):
    store = make_store(tmp_path)
    store.save([make_tx()])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["transactions.json"]


def test_load_accepts_integer_amount(tmp_path):
    (tmp_path / "transactions.json").write_text(
        json.dumps([make_tx().__dict__ | {"amount": 12}]),
        encoding="utf-8",
    )

    loaded = make_store(tmp_path).load()

    assert loaded[0].amount == 12.0
    assert isinstance(loaded[0].amount, float)


def test_load_ignores_unknown_keys(tmp_path):
    (tmp_path / "transactions.json").write_text(
        json.dumps([make_tx().__dict__ | {"note": "hand edited"}]),
        encoding="utf-8",
    )

    assert make_store(tmp_path).load() == [make_tx()]


@pytest.mark.parametrize(
    "content",
    [
        "",
        '[{"id": "1", "description": "Coff',
        "not json at all",
        '{"id": "1"}',
        "[1, 2]",
    ],
)
def test_load_malformed_file_raises(tmp_path, content):
    (tmp_path / "transactions.json").write_text(content, encoding="utf-8")

    with pytest.raises(DeserializationError):
        make_store(tmp_path).load()


def test_load_missing_field_raises_with_context(tmp_path):
    rec = make_tx().__dict__.copy()
    del rec["category"]
    (tmp_path / "transactions.json").write_text(
        json.dumps([make_tx().__dict__, rec]),
        encoding="utf-8",
    )

    with pytest.raises(DeserializationError) as exc:
        make_store(tmp_path).load()

    assert "[1] missing field 'category'" in str(exc.value)
    assert str(exc.value).startswith("Failed to parse transactions:")


@pytest.mark.parametrize(
    "field, value",
    [
        ("amount", "-4.50"),
        ("amount", True),
        ("amount", None),
        ("id", 1),
        ("date", None),
    ],
)
def test_load_wrong_field_type_raises(tmp_path, field, value):
    rec = make_tx().__dict__ | {field: value}
    (tmp_path / "transactions.json").write_text(json.dumps([rec]), encoding="utf-8")

    with pytest.raises(DeserializationError):
        make_store(tmp_path).load()


def test_load_rejects_non_finite_amount(tmp_path):
    (tmp_path / "transactions.json").write_text(
        '[{"id": "1", "description": "x", "amount": NaN, "transaction_type": "expense",'
        ' "category": "c", "account": "a", "month": "2024-01", "date": "2024-01-01"}]',
        encoding="utf-8",
    )

    with pytest.raises(DeserializationError):
        make_store(tmp_path).load()


def test_provider_without_directory_raises_path_resolution_error(tmp_path):
    store = make_store(None)

    with pytest.raises(PathResolutionError):
        store.save([make_tx()])
    with pytest.raises(PathResolutionError):
        store.load()


def test_file_in_place_of_directory_raises_directory_creation_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(DirectoryCreationError):
        make_store(blocker / "familyledger").save([make_tx()])
    with pytest.raises(DirectoryCreationError):
        make_store(blocker).load()


def test_unreadable_path_raises_read_error(tmp_path):
    (tmp_path / "transactions.json").mkdir()

    with pytest.raises(ReadError):
        make_store(tmp_path).load()


def test_write_failure_raises_write_error_and_cleans_tmp(tmp_path):
    (tmp_path / "transactions.json").mkdir()

    with pytest.raises(WriteError) as exc:
        make_store(tmp_path).save([make_tx()])

    assert str(exc.value).startswith("Failed to write transactions file:")
    assert list(tmp_path.glob("*.tmp")) == []


def test_serialization_error_keeps_previous_file(tmp_path):
    store = make_store(tmp_path)
    store.save([make_tx()])

    with pytest.raises(SerializationError):
        store.save([make_tx(amount=float("nan"))])

    assert store.load() == [make_tx()]


def test_save_rejects_non_transaction_items(tmp_path):
    with pytest.raises(SerializationError):
        make_store(tmp_path).save([{"id": "1"}])


def test_load_non_utf8_file_raises(tmp_path):
    (tmp_path / "transactions.json").write_bytes(b'[{"id": "\xff\xfe"}]')

    with pytest.raises(DeserializationError) as exc:
        make_store(tmp_path).load()

    assert str(exc.value).startswith("Failed to parse transactions: not valid UTF-8")


def test_save_lone_surrogate_raises_serialization_error(tmp_path):
    store = make_store(tmp_path)
    store.save([make_tx()])

    with pytest.raises(SerializationError):
        store.save([make_tx(description="bad \ud800")])

    assert list(tmp_path.glob("*.tmp")) == []
    assert store.load() == [make_tx()]


def test_file_store_hooks_are_abstract():
    with pytest.raises(TypeError):
        JsonFileStore(directory_provider=lambda: None)  # type: ignore[abstract]


def test_stale_tmp_file_does_not_block_save(tmp_path):
    # un ancien tmp à nom fixe (ici un dossier) ne doit pas gêner
    (tmp_path / "transactions.json.tmp").mkdir()
    store = make_store(tmp_path)

    store.save([make_tx()])

    assert store.load() == [make_tx()]


def test_concurrent_saves_leave_one_whole_collection(tmp_path):
    store = make_store(tmp_path)
    collections = [
        [make_tx(id=f"{n}-{i}", description="x" * 2000) for i in range(50)]
        for n in range(8)
    ]
    errors: list[BaseException] = []

    def worker(txs):
        try:
            store.save(txs)
        except BaseException as e:  # remonté dans le thread principal
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(c,)) for c in collections]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert store.load() in collections
    assert list(tmp_path.glob("*.tmp")) == []
