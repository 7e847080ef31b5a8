#!/usr/bin/env python
import sys
from rich.console import Console
from tool_chat.cli import main as cli_main

console = Console()

def main() -> None:
    try:
        cli_main()
        sys.exit(0)
    except Exception as e:
        console.print(f"[bold red]Chat app failed:[/bold red] {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
