from rich.align import Align
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from ..clients.base import TokenUsage
from ..tools.base import ParsedCall, format_value
from ..tools.loop import ToolInvocation


class ChatDisplay:
    """Renders the conversation to the terminal."""

    def __init__(self, console: Console | None = None, plain: bool = False):
        self.console = console or Console()
        self.plain = plain

    def print_banner(self):
        self.console.print("AI Terminal Chat", style="bold", highlight=False)
        self.console.print("Type 'exit' or '/exit' to leave the conversation.\n", highlight=False)

    def print_tool_call(self, call: ParsedCall):
        self.console.print(f"[dim]AI requested {call.tool_name}:[/dim] {escape(str(call.args_as_dict()))}", highlight=False)

    def print_tool_result(self, invocation: ToolInvocation):
        outcome = invocation.outcome
        if outcome.ok:
            self.console.print(f"[cyan]Tool result:[/cyan] {escape(format_value(outcome.value))}\n", highlight=False)
        else:
            self.console.print(f"[yellow]Tool error:[/yellow] {escape(str(outcome.error))}\n", highlight=False)

    def print_assistant_message(self, content: str, model: str):
        if self.plain:
            self.console.print(f"AI ({model}): {content}\n", markup=False, highlight=False)
            return
        if not content.strip():
            self.console.print("[bold red]Error:[/bold red] Empty response received.")
            return
        assistant_panel = Panel(
            Markdown(content.strip()),
            title=f"[bold green]AI ({escape(model)})[/bold green]",
            border_style="green",
            padding=(1, 2),
        )
        self.console.print(Align(assistant_panel, align="left"))
        self.console.print()

    def print_usage(self, usage: TokenUsage | None):
        if usage:
            self.console.print(f"[dim]Tokens: {usage}[/dim]")

    def print_error(self, message: str):
        self.console.print(f"[bold red]Failed to reach AI:[/bold red] {escape(message)}\n", highlight=False)

    def print_goodbye(self):
        self.console.print("Goodbye!")

    def print_tool_loop_exceeded(self, message: str):
        self.console.print(f"[bold yellow]Turn abandoned:[/bold yellow] {escape(message)}\n", highlight=False)
