import argparse
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from spmat.sparse import DOK

# ---------- Builders ----------


def build_dense_int(m: int, n: int, density: float, seed: int) -> np.ndarray:
    rs = np.random.RandomState(seed)
    dense = rs.randint(-9, 10, size=(m, n)).astype(np.int64)
    dense[rs.random_sample((m, n)) > density] = 0
    return dense


def build_spmat_pair(
    m: int, k: int, n: int, density: float, seed: int
) -> Tuple[DOK, DOK, np.ndarray, np.ndarray]:
    A_dense = build_dense_int(m, k, density, seed)
    B_dense = build_dense_int(k, n, density, seed + 101)
    return DOK.from_dense(A_dense), DOK.from_dense(B_dense), A_dense, B_dense


def build_scipy_from_dense(arr: np.ndarray):
    try:
        import scipy.sparse as sp
    except Exception:
        return None
    return sp.csr_matrix(arr)


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float]) -> Optional[Dict[str, Any]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
    }


def main():
    p = argparse.ArgumentParser(description="DOK add/subtract/matmul benchmarks")
    p.add_argument("--m", type=int, default=200)
    p.add_argument("--k", type=int, default=200, help="Inner dimension for matmul")
    p.add_argument("--n", type=int, default=200)
    p.add_argument("--density", type=float, default=0.01)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--no_dense_method", action="store_true", help="Skip the O(m*n*k) matmul")
    p.add_argument("--validate", action="store_true")

    args = p.parse_args()

    A, B, A_dense, B_dense = build_spmat_pair(args.m, args.k, args.n, args.density, args.seed)
    A2 = DOK.from_dense(build_dense_int(args.m, args.k, args.density, args.seed + 7))

    results: List[Dict[str, Any]] = []

    for name, fn in [("dok:add", lambda: A + A2), ("dok:subtract", lambda: A - A2)]:
        stats = summarize(name, time_op(fn, args.warmup, args.repeat))
        if stats:
            results.append(stats)

    methods = ["rowcol"] if args.no_dense_method else ["rowcol", "dense"]
    C_ref = A_dense @ B_dense
    for method in methods:
        times = time_op(lambda: A.multiply(B, method=method), args.warmup, args.repeat)
        stats = summarize(f"dok:matmul[{method}]", times)
        if stats:
            results.append(stats)
        if args.validate:
            out = A.multiply(B, method=method).toarray()
            if not np.array_equal(out, C_ref):
                raise AssertionError(f"Validation failed: matmul[{method}] vs numpy")

    if not args.no_scipy:
        A_sp = build_scipy_from_dense(A_dense)
        B_sp = build_scipy_from_dense(B_dense)
        if A_sp is not None:
            times = time_op(lambda: A_sp @ B_sp, args.warmup, args.repeat)
            stats = summarize("scipy:matmul", times)
            if stats:
                results.append(stats)

    # ---- print summary ----
    print(
        f"DOK Benchmarks: m={args.m} k={args.k} n={args.n} density={args.density} "
        f"nnz(A)={A.nnz} nnz(B)={B.nnz}"
    )
    for r in results:
        print(
            f"{r['name']:>20}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms"
        )


if __name__ == "__main__":
    main()
