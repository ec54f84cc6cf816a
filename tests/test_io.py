import importlib.util
from pathlib import Path

import numpy as np
import pytest

from witness_complex import build_witness_complex, load_complex, load_points, save_complex
from witness_complex.config import default_config, merge_config


def _load_cli():
    path = Path(__file__).resolve().parents[1] / "build_complex.py"
    spec = importlib.util.spec_from_file_location("build_complex", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_points(path, pts, delimiter=" "):
    path.write_text("\n".join(delimiter.join(str(x) for x in p) for p in pts) + "\n", encoding="utf-8")
    return path


def test_load_points_text_and_npy(tmp_path):
    pts = np.array([[0.0, 1.5], [2.0, -1.0], [3.25, 4.0]])
    np.testing.assert_array_equal(load_points(_write_points(tmp_path / "a.txt", pts)), pts)
    np.testing.assert_array_equal(load_points(_write_points(tmp_path / "b.csv", pts, ",")), pts)
    np.save(tmp_path / "c.npy", pts)
    np.testing.assert_array_equal(load_points(tmp_path / "c.npy"), pts)


def test_single_point_file_is_two_dimensional(tmp_path):
    pts = load_points(_write_points(tmp_path / "one.txt", [[1.0, 2.0, 3.0]]))
    assert pts.shape == (1, 3)


def test_saved_complex_reloads(tmp_path):
    L = np.array([[0.0, 0.0], [1.0, 0.0], [-1.2, 0.0]])
    W = np.array([[0.1, 0.0]])
    st = build_witness_complex(L, W, config={"max_alpha_square": 2.0})
    path = save_complex(st, tmp_path / "out" / "complex.json")
    assert path.exists()
    again = load_complex(path)
    assert again.get_filtration() == st.get_filtration()
    assert again.dimension() == 2


def test_merge_config_rejects_unknown_keys():
    cfg = merge_config({"max_alpha_square": 0.3})
    assert cfg["max_alpha_square"] == 0.3
    assert cfg["search"] == default_config()["search"]
    with pytest.raises(ValueError):
        merge_config({"max_alpha": 0.3})


def test_cli_builds_and_saves(tmp_path, capsys):
    cli = _load_cli()
    rng = np.random.default_rng(0)
    W = rng.uniform(size=(60, 2))
    lm = _write_points(tmp_path / "L.txt", W[:8])
    wt = _write_points(tmp_path / "W.txt", W)
    out = tmp_path / "complex.json"
    code = cli.main(["--landmarks", str(lm), "--witnesses", str(wt), "--alpha2", "0.01", "--max-dim", "2", "--output", str(out)])
    assert code == 0
    assert out.exists()
    assert "vertices:   8" in capsys.readouterr().out
    assert load_complex(out).num_vertices() == 8


def test_cli_reports_bad_relaxation(tmp_path):
    cli = _load_cli()
    pts = np.array([[0.0, 0.0], [1.0, 1.0]])
    lm = _write_points(tmp_path / "L.txt", pts)
    code = cli.main(["--landmarks", str(lm), "--witnesses", str(lm), "--alpha2", "-1"])
    assert code == 1


def test_saved_complex_keeps_declared_dimension(tmp_path):
    L = np.array([[0.0, 0.0]])
    W = np.array([[1.0, 0.0], [0.0, 2.0]])
    st = build_witness_complex(L, W, config={"max_alpha_square": 1.0})
    assert st.upper_bound_dimension() == 1
    again = load_complex(save_complex(st, tmp_path / "single.json"))
    assert again.dimension() == 0
    assert again.upper_bound_dimension() == 1
