import pytest
import coursework.exercises as ex
from coursework.signatures import missing_symbols

def test_catalogue_covers_solutions():
    names = [e["name"] for e in ex.EXERCISES]
    assert names == ["word_occurrences", "car", "validate_keys"]
    code = ex.SOLUTION_FILE.read_text()
    for e in ex.EXERCISES:
        assert missing_symbols(code, e["symbols"]) == []

def test_get_exercise_unknown():
    with pytest.raises(ValueError):
        ex.get_exercise("nope")

def test_eval_exercise_runs_tests(monkeypatch):
    calls = []

    def fake_run_tests(tests, timeout_s=5, solution=None):
        calls.append(tests)
        return {"pass_frac": 1.0, "passed": 2, "failed": 0, "total": 2, "stdout": "", "returncode": 0}

    monkeypatch.setattr(ex.verify, "run_tests", fake_run_tests)
    out = ex.eval_exercise(ex.get_exercise("car"))
    assert out["passed"] and out["missing"] == []
    assert calls == [["tests/tasks/test_car.py"]]

def test_eval_exercise_missing_symbol_skips_tests(tmp_path, monkeypatch):
    sol = tmp_path / "solutions.py"
    sol.write_text("class Car:\n    def get_age(self):\n        return 0\n")
    monkeypatch.setattr(ex.verify, "run_tests", lambda *a, **kw: pytest.fail("tests should not run"))
    out = ex.eval_exercise(ex.get_exercise("car"), solution=sol)
    assert not out["passed"]
    assert out["missing"] == ["Car.get_age_description"]

def test_eval_exercise_parse_error(tmp_path):
    sol = tmp_path / "solutions.py"
    sol.write_text("def validate_keys(:\n")
    out = ex.eval_exercise(ex.get_exercise("validate_keys"), solution=sol)
    assert not out["passed"] and "error" in out

def test_eval_all_pass_rate(monkeypatch):
    def fake_run_tests(tests, timeout_s=5, solution=None):
        ok = "car" not in tests[0]
        return {"pass_frac": 1.0 if ok else 0.5, "passed": 1, "failed": 0 if ok else 1, "returncode": 0 if ok else 1}

    monkeypatch.setattr(ex.verify, "run_tests", fake_run_tests)
    summary = ex.eval_all()
    assert summary["pass_rate"] == pytest.approx(2 / 3)
    assert [r["passed"] for r in summary["results"]] == [True, False, True]
    assert ex.main(["--only", "word_occurrences"]) == 0
    assert ex.main(["--only", "bogus"]) == 2

def test_eval_exercise_grades_given_file(tmp_path):
    sol = tmp_path / "solutions.py"
    sol.write_text("def validate_keys(obj, keys):\n    return False\n")
    out = ex.eval_exercise(ex.get_exercise("validate_keys"), solution=sol)
    assert not out["passed"]
    assert out["missing"] == []
    assert out["verify"]["failed"] == 2 and out["verify"]["returncode"] != 0

def test_eval_exercise_packaged_solution_passes():
    out = ex.eval_exercise(ex.get_exercise("car"))
    assert out["passed"]
    assert out["verify"]["passed"] == 2
