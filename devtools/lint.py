import subprocess
import sys
from pathlib import Path

from funlog import log_calls
from rich import get_console, reconfigure
from rich import print as rprint

PROJECT_ROOT = Path.cwd().resolve()
CODE_PATHS = [str(PROJECT_ROOT / name) for name in ("src", "tests", "devtools")]
DOC_PATHS = [str(PROJECT_ROOT / name) for name in ("README.md", "DESIGN.md")]

STEPS: list[list[str]] = [
    ["codespell", "--write-changes", *CODE_PATHS, *DOC_PATHS],
    ["ruff", "check", "--fix", *CODE_PATHS],
    ["ruff", "format", *CODE_PATHS],
    ["ty", "check", "--project", str(PROJECT_ROOT), "--error", "unused-ignore-comment"]
    + CODE_PATHS,
]

# No emojis on legacy windows.
reconfigure(emoji=not get_console().options.legacy_windows)


def main() -> int:
    rprint()
    errcount = sum(run(cmd) for cmd in STEPS)
    rprint()

    if errcount:
        rprint(f"[bold red]:x: Lint failed with {errcount} errors.[/bold red]")
    else:
        rprint("[bold green]:white_check_mark: Lint passed![/bold green]")
    rprint()

    return errcount


@log_calls(level="warning", show_timing_only=True)
def run(cmd: list[str]) -> int:
    rprint()
    rprint(f"[bold green]:arrow_forward: {' '.join(cmd)}[/bold green]")

    try:
        subprocess.run(cmd, text=True, check=True)
    except subprocess.CalledProcessError as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return 1
    except FileNotFoundError as e:
        rprint(f"[bold red]Executable not found: {e}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
