"""Shared helpers: console output, identifier sanitization and schema I/O.

Names and free text in a schema may come from an untrusted caller, so every
identifier embedded in Move source goes through :func:`normalize` and every
display string through :func:`sanitize_display`.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from unidecode import unidecode

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_SEPARATORS = {"_": "_", "-": "_", " ": "_"}

# Characters that could terminate a Move byte string or open a display
# template placeholder.
_UNSAFE_DISPLAY = re.compile(r'["\\{}\x00-\x1f\x7f]')


def deunicode(text: str) -> str:
    """Transliterate *text* to ASCII, dropping characters with no equivalent."""
    return unidecode(text, errors="ignore")


def normalize(text: str) -> str:
    """Reduce arbitrary text to a Move identifier fragment.

    Transliterates to ASCII, maps ``-`` and spaces to ``_`` and drops every
    other character that is not an ASCII letter or digit.  The result may be
    empty; callers that need a usable identifier must check for that.

    Examples::

        normalize("Suimarines")     -> "Suimarines"
        normalize("Crème Brûlée")   -> "Creme_Brulee"
        normalize("my-nft #1")      -> "my_nft_1"
    """
    out: list[str] = []
    for char in deunicode(text):
        if char in _SEPARATORS:
            out.append(_SEPARATORS[char])
        elif char.isascii() and char.isalnum():
            out.append(char)
    return "".join(out)


def sanitize_display(text: str) -> str:
    """Make free text safe to embed inside a Move ``b"..."`` literal."""
    return _UNSAFE_DISPLAY.sub("", deunicode(text))


# ---------------------------------------------------------------------------
# Schema file I/O
# ---------------------------------------------------------------------------

_JSON_COMMENT = re.compile(r"(?m)^\s*//.*$")

YAML_SUFFIXES = (".yaml", ".yml")


def strip_json_comments(raw: str) -> str:
    """Remove whole-line ``//`` comments from a JSON document."""
    return _JSON_COMMENT.sub("", raw)


def load_document(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML mapping, choosing the parser by file extension.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is unknown, the content does not parse,
            or the top level is not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    suffix = file_path.suffix.lower()

    if suffix == ".json":
        try:
            data = json.loads(strip_json_comments(raw))
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
    elif suffix in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML: {exc}") from exc
    else:
        raise ValueError(
            f"unsupported file extension {suffix!r}, expected .json, .yaml or .yml"
        )

    if not isinstance(data, dict):
        raise ValueError("top-level value must be a mapping")
    return data


def dump_document(data: dict[str, Any], path: str | Path) -> Path:
    """Write *data* as JSON or YAML depending on the extension of *path*."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if file_path.suffix.lower() in YAML_SUFFIXES:
        content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    file_path.write_text(content, encoding="utf-8")
    return file_path


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(f"[cyan]{message}[/cyan]")


def create_progress(disable: bool = False) -> Progress:
    """Create a Rich progress bar for batch uploads."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        disable=disable,
    )
