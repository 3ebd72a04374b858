import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table
from rich.theme import Theme


# Função para determinar se o terminal suporta emojis
def supports_emoji():
    try:
        return sys.stdout.encoding.lower().startswith("utf")
    except AttributeError:
        return False


# Define os ícones ou alternativas de texto
if supports_emoji():
    ICON_CHECK = "✅"
    ICON_CREATE = "🚀"
    ICON_NEW = "🆕"
    ICON_CHANGED = "🔄"
else:
    ICON_CHECK = "[OK]"
    ICON_CREATE = "[CREATE]"
    ICON_NEW = "[NEW]"
    ICON_CHANGED = "[CHANGED]"

custom_theme = Theme(
    {
        "created": "bold yellow",
        "exists": "bold green",
        "error": "bold red",
        "count": "bold cyan",
    }
)


def check_and_create_directories(*directories: Path, console: Console | None = None):
    """Garante que os diretorios existem e mostra o resultado numa tabela."""
    console = console or Console(theme=custom_theme)

    results = []
    for directory in directories:
        dir_path = Path(directory)
        if not dir_path.exists():
            dir_path.mkdir(parents=True)
            results.append((dir_path, "Created", "created"))
        else:
            results.append((dir_path, "Folder Exists", "exists"))

    table = Table(
        title="Directory Check Results",
        box=box.ASCII,
        show_header=True,
        header_style="yellow3",
    )
    table.add_column("Status", justify="center")
    table.add_column("Directory", justify="left")
    table.add_column("Message", justify="center")

    for dir_path, status, style in results:
        status_symbol = ICON_CHECK if status == "Folder Exists" else ICON_CREATE
        table.add_row(
            f"[{style}]{status_symbol}[/{style}]",
            f"{dir_path}",
            f"[{style}]{status}[/{style}]",
        )

    console.print(table)
    return results


def print_build_summary(outputs, console: Console | None = None):
    """Tabela final: quantos registros, novos e alterados por arquivo."""
    console = console or Console(theme=custom_theme)

    table = Table(
        title="Build Summary",
        box=box.ASCII,
        show_header=True,
        header_style="yellow3",
    )
    table.add_column("Output", justify="left")
    table.add_column("Records", justify="right", style="count")
    table.add_column(f"{ICON_NEW} New", justify="right")
    table.add_column(f"{ICON_CHANGED} Changed", justify="right")

    for name, records in outputs.items():
        entries = [r for r in records if isinstance(r, dict)]
        new = sum(1 for r in entries if r.get("is_new"))
        changed = sum(1 for r in entries if r.get("is_changed"))
        table.add_row(name, str(len(records)), str(new), str(changed))

    console.print(table)
    return table
