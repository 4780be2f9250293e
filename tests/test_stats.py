import numpy as np
import pytest

from mapbench.stats import TimingResult, summary_table, write_summary_csv


def make_result(samples, operations=1, name="dict"):
    return TimingResult(
        group="Map size: 10",
        name=name,
        operations=operations,
        samples=samples,
        suite="single",
        map_size=10,
    )


def test_mean_and_ns_per_operation():
    result = make_result([1e-6, 3e-6], operations=2)
    assert result.mean == pytest.approx(2e-6)
    assert result.ns_per_operation == pytest.approx(1000.0)


def test_ci95():
    samples = np.array([1.0, 2.0, 3.0, 4.0])
    result = make_result(samples)
    expected = 1.96 * samples.std() / np.sqrt(4)
    assert result.ci95 == pytest.approx(expected)
    assert result.ci95_ns_per_operation == pytest.approx(expected * 1e9)


def test_single_sample_has_zero_ci():
    assert make_result([5e-7]).ci95 == 0.0


def test_empty_samples_rejected():
    with pytest.raises(ValueError):
        make_result([])


def test_zero_operations_rejected():
    with pytest.raises(ValueError):
        make_result([1.0], operations=0)


def test_summary_table_rows():
    table = summary_table([make_result([1e-6]), make_result([2e-6], name="SortedDict")])
    assert list(table["name"]) == ["dict", "SortedDict"]
    assert list(table["map_size"]) == [10, 10]
    assert table["ns_per_op"][1] == pytest.approx(2000.0)


def test_write_summary_csv(tmp_path):
    path = write_summary_csv(tmp_path / "summary.csv", [make_result([1e-6])])
    lines = path.read_text().splitlines()
    assert lines[0] == "suite,map_size,group,name,operations,ns_per_op,ci95_ns_per_op"
    assert lines[1] == 'single,10,"Map size: 10","dict",1,1000.0000,0.0000'
