import csv

import pytest

import experiments as exp


@pytest.mark.parametrize("name", sorted(exp.GENERATOR_REGISTRY))
def test_generators_are_seeded(name):
    _, a = exp.generate_dataset(name, 512, seed=3)
    _, b = exp.generate_dataset(name, 512, seed=3)
    assert a == b
    assert len(a) == 512


def test_unknown_generator_falls_back():
    name, data = exp.generate_dataset("nope", 64, seed=0)
    assert name == "nope_fallback_uniform256"
    assert len(data) == 64


@pytest.mark.parametrize("pipeline", exp.PIPELINES)
def test_run_one_roundtrips(pipeline):
    _, data = exp.generate_dataset("english_like", 4096, seed=1)
    row = exp.run_one(data, pipeline)
    assert row.correctness_ok == 1
    assert row.pipeline == pipeline
    assert 0 < row.compression_ratio < 1
    assert 1 <= row.pad_bits <= 8


def test_container_pays_for_its_header():
    data = exp.gen_zipf_like(2048, seed=5)
    plain = exp.run_one(data, "huffman")
    boxed = exp.run_one(data, "container")
    assert boxed.compressed_bytes - plain.compressed_bytes == 4 + 2 + 5 * plain.unique_symbols


def test_run_one_empty_input():
    for pipeline in exp.PIPELINES:
        assert exp.run_one(b"", pipeline).correctness_ok == 1


def test_run_one_rejects_unknown_pipeline():
    with pytest.raises(ValueError):
        exp.run_one(b"abc", "huffman+obst")


def test_csv_outputs(tmp_path):
    rows = []
    for run_id in (1, 2):
        _, data = exp.generate_dataset("repetitive90", 1024, seed=run_id)
        for pipeline in exp.PIPELINES:
            row = exp.run_one(data, pipeline)
            row.exp_name = "exp1_distribution"
            row.dataset_name = "repetitive90"
            row.run_id = run_id
            rows.append(row)

    exp.write_csv(tmp_path / "metrics.csv", rows)
    exp.group_summary(rows, tmp_path / "summary.csv")
    exp.plot_experiment_1(rows, tmp_path)

    with (tmp_path / "summary.csv").open(newline="", encoding="utf-8") as f:
        summary = list(csv.DictReader(f))
    assert len(summary) == 2
    assert all(r["n_runs"] == "2" for r in summary)
    assert all(float(r["correctness_ok_rate"]) == 1.0 for r in summary)
    assert (tmp_path / "exp1_compression_ratio.png").exists()
