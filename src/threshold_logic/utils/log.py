"""
Light event logging for the identification pipeline.

Events go to a shared Rich console and stay silent unless ``verbose`` is set.
"""

from rich.console import Console

console = Console(stderr=True, highlight=False)


def log_event(msg: str, *, verbose: bool = True):
    """Minimal consistent log printer for pipeline steps."""
    if verbose:
        console.print(f"[threshold] {msg}", markup=False)
