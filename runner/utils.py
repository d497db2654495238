from __future__ import annotations

from runner.types import CheckResult


def percentile(values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation."""
    if not values:
        return 0.0
    s = sorted(values)
    k = (len(s) - 1) * p
    f = int(k)
    c = min(f + 1, len(s) - 1)
    if f == c:
        return s[f]
    d0 = s[f] * (c - k)
    d1 = s[c] * (k - f)
    return d0 + d1


def summarize(results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code (0 only if every check passed)."""
    timings = [r.elapsed_ms for r in results]
    failures = [
        {
            "check": r.name,
            "status_code": r.status_code,
            "expected_status": r.expected_status,
            "detail": r.detail,
        }
        for r in results
        if not r.passed
    ]
    summary = {
        "component": "runner",
        "event": "summary",
        "checks": len(results),
        "passed": len(results) - len(failures),
        "failed": len(failures),
        "timings": {
            "avg_ms": round(sum(timings) / len(timings), 2) if timings else 0.0,
            "p95_ms": round(percentile(timings, 0.95), 2),
            "max_ms": round(max(timings), 2) if timings else 0.0,
        },
        "failures": failures,
    }
    exit_code = 0 if (results and not failures) else 1
    return summary, exit_code
