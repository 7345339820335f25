from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List, Any, Optional
from . import verify
from .signatures import SolutionParseError, missing_symbols

# Exercise catalogue (one entry per exercise in solutions.py)
EXERCISES: List[Dict[str, Any]] = [
    {
        "name": "word_occurrences",
        "symbols": ["count_word_occurrences"],
        "signature": "def count_word_occurrences(sentence: str, word: str) -> int:",
        "tests": ["tests/tasks/test_word_occurrences.py"],
        "prompt": "Count the space-separated words of sentence equal to word, ignoring case."
    },
    {
        "name": "car",
        "symbols": ["Car", "Car.get_age", "Car.get_age_description"],
        "signature": "class Car(make: str, model: str, year: int)",
        "tests": ["tests/tasks/test_car.py"],
        "prompt": "Model a car; get_age() is 2024 - year, get_age_description() adds '(assuming current year is 2024)'."
    },
    {
        "name": "validate_keys",
        "symbols": ["validate_keys"],
        "signature": "def validate_keys(obj, keys: Iterable[str]) -> bool:",
        "tests": ["tests/tasks/test_validate_keys.py"],
        "prompt": "Return True if every name in keys is present on obj."
    },
]

SOLUTION_FILE = Path(__file__).with_name("solutions.py")

def get_exercise(name: str) -> Dict[str, Any]:
    for spec in EXERCISES:
        if spec["name"] == name:
            return spec
    raise ValueError(f"Unknown exercise: {name}")

def _is_green(res: Dict[str, Any]) -> bool:
    return res.get("returncode") == 0 and res.get("pass_frac") == 1.0

def eval_exercise(spec: Dict[str, Any], timeout_s: int = 5, solution: Path = SOLUTION_FILE) -> Dict[str, Any]:
    """Grade one exercise: structural check of the solution source, then its tests.

    Tests are skipped when the solution is missing a required symbol or does not parse.
    A `solution` other than the packaged one is imported by the tests in place of
    `coursework.solutions`.
    """
    result: Dict[str, Any] = {"name": spec["name"], "passed": False, "missing": [], "verify": None}
    try:
        missing = missing_symbols(solution.read_text(), spec["symbols"])
    except SolutionParseError as e:
        result["error"] = str(e)
        return result
    if missing:
        result["missing"] = missing
        return result

    override = None if solution.resolve() == SOLUTION_FILE.resolve() else solution
    res = verify.run_tests(spec["tests"], timeout_s=timeout_s, solution=override)
    result["verify"] = {k: res.get(k) for k in ("pass_frac", "passed", "failed", "returncode")}
    result["passed"] = _is_green(res)
    return result

def eval_all(timeout_s: int = 5, names: Optional[List[str]] = None) -> Dict[str, Any]:
    specs = [get_exercise(n) for n in names] if names else EXERCISES
    per = [eval_exercise(s, timeout_s=timeout_s) for s in specs]
    pass_count = sum(1 for r in per if r["passed"])
    return {"pass_rate": pass_count / len(per) if per else 0.0, "results": per}

def main(argv: Optional[List[str]] = None) -> int:
    import argparse, sys
    ap = argparse.ArgumentParser(prog="coursework.exercises", description="Grade the exercises in solutions.py.")
    ap.add_argument("--only", nargs="*", default=None, help="Exercise names to grade (default: all)")
    ap.add_argument("--timeout", type=int, default=5)
    ap.add_argument("--list", action="store_true", help="Print the exercise catalogue and exit")
    args = ap.parse_args(argv)

    if args.list:
        print(json.dumps([{k: e[k] for k in ("name", "signature", "prompt")} for e in EXERCISES], indent=2))
        return 0

    try:
        summary = eval_all(timeout_s=args.timeout, names=args.only)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    print(json.dumps(summary, indent=2))
    return 0 if all(r["passed"] for r in summary["results"]) else 1

if __name__ == "__main__":
    raise SystemExit(main())
