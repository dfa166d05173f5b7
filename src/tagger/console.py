# src/tagger/console.py
from rich.console import Console

# Default sink for non-fatal diagnostics; callers may pass their own Console.
console = Console(stderr=True)
