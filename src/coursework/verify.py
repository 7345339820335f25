from __future__ import annotations
import os, subprocess, sys, re, json
from pathlib import Path
from typing import List, Optional, Dict, Any

PYTHON_EXE = sys.executable

_COUNTS_RE = re.compile(r"(\d+)\s+(passed|failed|error|errors|skipped|xfailed|xpassed)", re.I)

def _project_root() -> Path:
    # src/coursework/verify.py -> src -> project root
    return Path(__file__).resolve().parents[2]

def _parse_summary(text: str) -> Dict[str, Any]:
    # Look from the bottom up for the pytest counts line
    passed = failed = 0
    for line in text.splitlines()[::-1]:
        low = line.lower()
        if "passed" not in low and "failed" not in low and "error" not in low:
            continue
        pairs = _COUNTS_RE.findall(line)
        if not pairs:
            continue
        for num, label in pairs:
            lab = label.lower()
            if lab == "passed":
                passed = int(num)
            elif lab in ("failed", "error", "errors"):
                failed += int(num)
        break
    total = passed + failed
    pass_frac = (passed / total) if total else 0.0
    return {"passed": passed, "failed": failed, "total": total, "pass_frac": pass_frac}

def run_tests(tests: Optional[List[str]] = None, timeout_s: int = 5, solution: Optional[Path] = None) -> Dict[str, Any]:
    """Run pytest inside a restricted child process. Returns structured results.

    Args:
        tests: Optional list of pytest paths or node ids, relative to the project root
            (e.g., ['tests/tasks/test_car.py']).
        timeout_s: Wall-time timeout in seconds for the child process.
        solution: Optional file the tests import as
            `coursework.solutions` instead of the packaged module.

    Returns:
        dict with keys: pass_frac, passed, failed, total, stdout, returncode.
    """
    args = [PYTHON_EXE, "-m", "coursework._sandbox_entry", "--timeout", str(timeout_s)]
    if solution is not None:
        args += ["--solution", str(Path(solution).resolve())]
    if tests:
        args += tests

    root = _project_root()
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(root / "src"), env.get("PYTHONPATH")) if p)

    try:
        cp = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=max(1, timeout_s + 1),
            text=True,
            cwd=str(root),
            env=env,
        )
        out = cp.stdout
        rc = cp.returncode
    except subprocess.TimeoutExpired as e:
        partial = e.stdout or ""
        if isinstance(partial, bytes):
            partial = partial.decode(errors="replace")
        out = partial + "\nTIMEOUT: verifier exceeded wall clock."
        rc = 124

    summary = _parse_summary(out)
    summary.update({"stdout": out, "returncode": rc})
    return summary

def _print_cli(res: Dict[str, Any]):
    print(json.dumps(
        {
            "pass_frac": round(res.get("pass_frac", 0.0), 3),
            "passed": res.get("passed"),
            "failed": res.get("failed"),
            "total": res.get("total"),
            "returncode": res.get("returncode"),
        },
        indent=2,
    ))
    tail = "\n".join(res.get("stdout","").splitlines()[-10:])
    print("\n--- pytest tail ---\n" + tail)

if __name__ == "__main__":
    import argparse
    ap = argparse.ArgumentParser()
    ap.add_argument("--tests", nargs="*", default=None, help="PyTest paths or node ids")
    ap.add_argument("--timeout", type=int, default=5)
    args = ap.parse_args()

    res = run_tests(args.tests, args.timeout)
    _print_cli(res)
    sys.exit(0 if res.get("failed", 1) == 0 and res.get("returncode", 1) == 0 else 1)
