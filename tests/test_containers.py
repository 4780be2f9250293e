import pytest

from mapbench.containers import CONTAINERS, ContainerSpec, DictAdapter

KEYS = [f"key{i}" for i in range(20)]


@pytest.fixture(params=sorted(CONTAINERS))
def spec(request):
    return CONTAINERS[request.param]


def test_registry_names_match_adapters():
    for name, spec in CONTAINERS.items():
        assert spec.name == name
        assert spec.factory().name == name


def test_build_populates(spec):
    adapter = spec.build(KEYS)
    assert len(adapter) == len(KEYS)
    assert all(key in adapter for key in KEYS)


def test_remove_then_insert(spec):
    adapter = spec.build(KEYS)
    adapter.remove("key3")
    assert "key3" not in adapter
    assert len(adapter) == len(KEYS) - 1
    adapter.insert("key3", 1)
    assert "key3" in adapter
    assert len(adapter) == len(KEYS)


def test_remove_missing_key_raises(spec):
    adapter = spec.build(KEYS)
    with pytest.raises(KeyError):
        adapter.remove("missing")


def test_batch_commits_on_exit(spec):
    adapter = spec.build(KEYS)
    with adapter.batch() as target:
        target.remove("key0")
        target.remove("key1")
        target.insert("new", 2)
        assert len(target) == len(KEYS) - 1
    assert "key0" not in adapter
    assert "key1" not in adapter
    assert "new" in adapter
    assert len(adapter) == len(KEYS) - 1


@pytest.mark.parametrize("name", ["pyrsistent PMap", "immutables Map"])
def test_persistent_versions_are_not_mutated(name):
    adapter = CONTAINERS[name].build(KEYS)
    before = adapter.map
    adapter.remove("key5")
    with adapter.batch() as target:
        target.remove("key6")
    assert "key5" in before
    assert "key6" in before
    assert len(before) == len(KEYS)


@pytest.mark.parametrize("name", ["pyrsistent PMap", "immutables Map"])
def test_failed_batch_keeps_previous_version(name):
    adapter = CONTAINERS[name].build(KEYS)
    with pytest.raises(RuntimeError):
        with adapter.batch() as target:
            target.remove("key0")
            raise RuntimeError("boom")
    assert "key0" in adapter
    # the adapter is usable again after the failed batch
    with adapter.batch() as target:
        target.remove("key0")
    assert "key0" not in adapter


@pytest.mark.parametrize("name", ["pyrsistent PMap", "immutables Map"])
def test_nested_batch_is_rejected(name):
    adapter = CONTAINERS[name].build(KEYS)
    with adapter.batch():
        with pytest.raises(RuntimeError):
            with adapter.batch():
                pass


def test_sorted_dict_keeps_order():
    adapter = CONTAINERS["SortedDict"].build(["b", "c", "a"])
    adapter.remove("a")
    adapter.insert("a", 1)
    assert list(adapter.map) == ["a", "b", "c"]


def test_custom_spec():
    spec = ContainerSpec("plain", DictAdapter)
    adapter = spec.build(["x"], value=7)
    assert adapter.map == {"x": 7}
