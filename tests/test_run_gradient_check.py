import run_gradient_check


def test_main_succeeds(capsys):
    assert run_gradient_check.main(["--n", "10", "--log-level", "warning"]) == 0
    out = capsys.readouterr().out
    assert "Adjoint vs Exact" in out
    assert "dg/dx = 10.0  expected = 10.0" in out
    assert "COMPUTATION GRAPH SUMMARY" in out


def test_main_with_other_inputs(capsys):
    assert run_gradient_check.main(["--a", "0.3", "--b", "-1.2", "--n", "0", "--strict"]) == 0
    out = capsys.readouterr().out
    assert "dg/dx = 0.0" in out


def test_closed_form():
    d_da, d_db = run_gradient_check.closed_form(0.0, 1.0)
    assert d_da == 1.0
    assert d_db == 0.0
