# tests/test_store.py
import pytest

from app.database import ProductStore
from app.errors import ApiError, ErrorKind
from app.models import Product


def make(pid, name="Thing"):
    return Product(id=pid, name=name, description="d", price=1, category="c", in_stock=True)


def test_seeded_store_order():
    store = ProductStore.seeded()
    assert len(store) == 5
    assert [p.id for p in store.list()] == ["1", "2", "3", "4", "5"]

def test_list_returns_copies():
    store = ProductStore([make("a")])
    snapshot = store.list()
    snapshot[0].name = "changed"
    snapshot.clear()
    assert store.get_by_id("a").name == "Thing"
    assert len(store) == 1

def test_insert_appends():
    store = ProductStore([make("a")])
    stored = store.insert(make("b"))
    assert stored.id == "b"
    assert [p.id for p in store.list()] == ["a", "b"]

def test_replace_keeps_id_and_position():
    store = ProductStore([make("a"), make("b")])
    updated = store.replace("a", {
        "name": "New", "description": "nd", "price": 2.5, "category": "x", "in_stock": False,
    })
    assert updated.id == "a"
    assert [p.id for p in store.list()] == ["a", "b"]
    assert store.get_by_id("a").to_dict() == {
        "id": "a", "name": "New", "description": "nd", "price": 2.5, "category": "x", "inStock": False,
    }

def test_remove_returns_record():
    store = ProductStore([make("a"), make("b"), make("c")])
    assert store.remove("b").id == "b"
    assert [p.id for p in store.list()] == ["a", "c"]

@pytest.mark.parametrize("op", [
    lambda s: s.get_by_id("zz"),
    lambda s: s.remove("zz"),
    lambda s: s.replace("zz", {}),
])
def test_missing_id_is_not_found(op):
    store = ProductStore([make("a")])
    with pytest.raises(ApiError) as exc:
        op(store)
    assert exc.value.kind is ErrorKind.NOT_FOUND
    assert exc.value.message == "Product with ID zz not found"
    assert len(store) == 1
