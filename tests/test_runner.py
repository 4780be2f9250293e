import numpy as np
import pytest

from mapbench.containers import CONTAINERS, ContainerSpec, DictAdapter
from mapbench.runner import BenchmarkConfig, BenchmarkRunner
from mapbench.selector import ConfigError, FilterChain


def run_collect(config, **kwargs):
    lines = []
    runner = BenchmarkRunner(config, emit=lines.append, **kwargs)
    result = runner.run()
    return runner, result, lines


def test_smoke_mode_runs_every_container():
    config = BenchmarkConfig(map_sizes=(10,), changes=(2,), test=True)
    _, result, lines = run_collect(config)
    assert result.results == []
    for name, spec in CONTAINERS.items():
        # once in the single suite, once more in the batch suite if batchable
        assert lines.count(name) == (2 if spec.supports_batch else 1)
    assert "Map size: 10" in lines
    assert "Map size: 10, N: 2" in lines


def test_filters_select_containers():
    filters = FilterChain.from_patterns([(True, "Map$"), (False, ".")])
    config = BenchmarkConfig(map_sizes=(10,), suites=("single",), test=True, filters=filters)
    runner, _, lines = run_collect(config)
    assert [spec.name for spec in runner.selected] == ["pyrsistent PMap", "immutables Map"]
    assert "dict" not in lines
    assert "immutables Map" in lines


def test_everything_filtered_skips_groups():
    filters = FilterChain.from_patterns([(True, "^nothing$")])
    config = BenchmarkConfig(map_sizes=(10, 100), suites=("single",), test=True, filters=filters)
    runner, result, lines = run_collect(config)
    assert runner.selected == []
    assert result.results == []
    assert not any(line.startswith("Map size") for line in lines)


def test_unknown_suite():
    with pytest.raises(ConfigError):
        BenchmarkRunner(BenchmarkConfig(suites=("nope",)))


def test_timed_run_collects_results(tmp_path):
    containers = {"dict": ContainerSpec("dict", DictAdapter)}
    config = BenchmarkConfig(map_sizes=(10,), changes=(2,), repeat=1)
    runner = BenchmarkRunner(config, containers=containers, emit=lambda _: None)
    result = runner.run(tmp_path, save=True, plot=True)

    assert [(r.suite, r.group) for r in result.results] == [
        ("single", "Map size: 10"),
        ("batch", "Map size: 10, N: 2"),
    ]
    assert result.for_suite("batch")[0].operations == 2
    assert all(r.ns_per_operation > 0 for r in result.results)

    assert result.output_file == tmp_path / "mapbench_seed42.npz"
    with np.load(result.output_file) as data:
        assert data["samples"].shape == (2, 1)
        assert list(data["summary"]["name"]) == ["dict", "dict"]
    assert result.summary_file.read_text().count("\n") == 3
    assert sorted(p.name for p in result.plot_files) == ["batch_size10.pdf", "single.pdf"]
    assert all(p.exists() for p in result.plot_files)


def test_same_seed_same_keys():
    seen = []

    class RecordingAdapter(DictAdapter):
        def populate(self, keys, value=1):
            seen.append(list(keys))
            return super().populate(keys, value)

    containers = {"dict": ContainerSpec("dict", RecordingAdapter)}
    for _ in range(2):
        config = BenchmarkConfig(map_sizes=(10,), suites=("single",), test=True, seed=3)
        BenchmarkRunner(config, containers=containers, emit=lambda _: None).run()
    assert seen[0] == seen[1]


def test_batch_suite_skips_specs_without_batch_support():
    containers = {
        "dict": ContainerSpec("dict", DictAdapter),
        "single only": ContainerSpec("single only", DictAdapter, supports_batch=False),
    }
    config = BenchmarkConfig(map_sizes=(10,), changes=(2,), test=True)
    lines = []
    BenchmarkRunner(config, containers=containers, emit=lines.append).run()
    batch_start = lines.index("Map size: 10, N: 2")
    assert "single only" in lines[:batch_start]
    assert "single only" not in lines[batch_start:]
    assert "dict" in lines[batch_start:]


def test_registered_tree_map_is_single_only():
    assert not CONTAINERS["BTrees OOBTree"].supports_batch
    filters = FilterChain.from_patterns([(True, "OOBTree")])
    config = BenchmarkConfig(map_sizes=(10,), changes=(2,), test=True, filters=filters)
    _, _, lines = run_collect(config)
    assert lines.count("BTrees OOBTree") == 1
    assert "Map size: 10, N: 2" not in lines


def test_output_settings_come_from_config(tmp_path):
    containers = {"dict": ContainerSpec("dict", DictAdapter)}
    config = BenchmarkConfig(
        map_sizes=(10,),
        suites=("single",),
        repeat=1,
        min_time=0.001,
        output_dir=tmp_path,
        save=True,
        plot=True,
    )
    result = BenchmarkRunner(config, containers=containers, emit=lambda _: None).run()
    assert result.output_file == tmp_path / "mapbench_seed42.npz"
    assert result.output_file.exists()
    assert [p.name for p in result.plot_files] == ["single.pdf"]


def test_run_arguments_override_config(tmp_path):
    containers = {"dict": ContainerSpec("dict", DictAdapter)}
    config = BenchmarkConfig(
        map_sizes=(10,), suites=("single",), repeat=1, min_time=0.001, save=True
    )
    runner = BenchmarkRunner(config, containers=containers, emit=lambda _: None)
    result = runner.run(tmp_path, save=False, plot=False)
    assert result.output_file is None
    assert list(tmp_path.iterdir()) == []
