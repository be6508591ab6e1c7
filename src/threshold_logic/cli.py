# src/threshold_logic/cli.py
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import IdentificationConfig
from .identification import Outcome, identify_threshold
from .truth_table import TruthTable
from .unateness import unateness_profile
from .verify import truth_table_frame

console = Console()


def _infer_num_vars(hex_text: str) -> int:
    digits = hex_text.strip().lower()
    if digits.startswith("0x"):
        digits = digits[2:]
    bits = 4 * len(digits)
    n = 0
    while (1 << n) < bits:
        n += 1
    if (1 << n) != bits:
        raise ValueError(f"cannot infer the number of variables from {hex_text!r}; pass --vars")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="threshold-id",
        description="Decide whether truth tables are threshold functions and print a linear form.",
    )
    p.add_argument("tables", nargs="+", help="hex truth tables, most significant digit first (e.g. e8)")
    p.add_argument("-n", "--vars", type=int, default=None, help="number of variables (default: from hex length)")
    p.add_argument("--backend", choices=["auto", "pulp", "scipy"], default="auto")
    p.add_argument("--time-limit", type=float, default=None, help="solver time limit in seconds")
    p.add_argument("--no-pin", action="store_true", help="do not pin don't-care weights to 0")
    p.add_argument("--table", action="store_true", help="print the full truth table with the linear form")
    p.add_argument("--profile", action="store_true", help="print the unateness of every variable")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = IdentificationConfig(
        backend=args.backend,
        time_limit=args.time_limit,
        pin_dont_care=not args.no_pin,
        verbose=args.verbose,
    )

    summary = Table(title="Threshold identification")
    summary.add_column("table")
    summary.add_column("n", justify="right")
    summary.add_column("outcome")
    summary.add_column("linear form [w; T]")
    summary.add_column("detail")

    failed = False
    for text in args.tables:
        try:
            n = args.vars if args.vars is not None else _infer_num_vars(text)
            tt = TruthTable.from_hex(text, n)
        except ValueError as e:
            parser.error(str(e))
        res = identify_threshold(tt, config=cfg)

        lf = res.linear_form
        form = f"{lf.as_list()[:-1]}; {lf.threshold}" if lf is not None else "-"
        detail = str(lf) if lf is not None else res.reason
        summary.add_row(tt.to_hex(), str(n), res.outcome.value, escape(form), escape(detail))
        failed |= res.outcome is Outcome.SOLVER_FAILURE

        if args.profile:
            prof = ", ".join(f"x{i}: {u.value}" for i, u in enumerate(unateness_profile(tt)))
            console.print(f"[bold]{tt.to_hex()}[/bold] unateness: {prof}")
        if args.table:
            console.print(truth_table_frame(tt, lf).to_string())

    console.print(summary)
    return 2 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
