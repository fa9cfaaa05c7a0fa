import csv

import pytest

import experiments as exp


def test_entropy():
    assert exp.entropy_bits_per_symbol(b"") == 0.0
    assert exp.entropy_bits_per_symbol(b"aaaa") == 0.0
    assert exp.entropy_bits_per_symbol(b"ab" * 10) == pytest.approx(1.0)


def test_generators_are_seeded():
    for name in exp.GENERATOR_REGISTRY:
        a = exp.generate_dataset(name, 500, seed=7)
        assert len(a) == 500
        assert a == exp.generate_dataset(name, 500, seed=7)


def test_unknown_generator():
    with pytest.raises(ValueError):
        exp.generate_dataset("nope", 10, seed=0)


def test_run_one_on_skewed_data():
    row = exp.run_one(exp.gen_repetitive(4000, dom_frac=0.95, seed=3))
    assert row.correctness_ok == 1
    assert row.compression_ratio < 1.0
    # a Huffman code is never better than the entropy bound
    assert row.body_bits_per_symbol >= row.entropy_bits_per_symbol
    assert 0.0 < row.header_fraction < 1.0


def test_csv_outputs(tmp_path):
    rows = []
    for run_id in (1, 2):
        row = exp.run_one(exp.gen_english_like(1000, seed=run_id))
        row.exp_name = "exp1_distribution"
        row.dataset_name = "english_like"
        row.run_id = run_id
        rows.append(row)

    exp.write_csv(tmp_path / "metrics.csv", rows)
    exp.group_summary(rows, tmp_path / "summary.csv")

    with (tmp_path / "metrics.csv").open(newline="") as f:
        assert len(list(csv.DictReader(f))) == 2
    with (tmp_path / "summary.csv").open(newline="") as f:
        summary = list(csv.DictReader(f))
    assert len(summary) == 1
    assert summary[0]["n_runs"] == "2"
    assert float(summary[0]["correctness_ok_rate"]) == 1.0


def test_main_small_run(tmp_path, capsys):
    status = exp.main([
        "--outdir", str(tmp_path), "--runs", "1",
        "--exp1_size_kb", "1", "--exp1_generators", "uniform16,single_byte",
        "--exp2_min_bytes", "256", "--exp2_max_kb", "1", "--exp2_generators", "repetitive99",
    ])
    assert status == 0
    assert (tmp_path / "metrics.csv").exists()
    assert (tmp_path / "exp1_compression_ratio.png").exists()
    assert (tmp_path / "exp2_header_fraction.png").exists()
    assert "Correctness rate across all runs: 1.000" in capsys.readouterr().out
