import argparse
import logging
import sys
import traceback
from typing import Callable

from rich.console import Console

from tool_chat.clients.base import ChatOptions
from tool_chat.clients.openrouter_client import OpenRouterClient
from tool_chat.core import ChatSession
from tool_chat.errors import ToolChatError, ToolLoopExceededError
from tool_chat.tools.registry import ToolRegistry, create_default_registry
from tool_chat.utils.config import Config
from tool_chat.utils.console import ChatDisplay

console = Console()
logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "/exit", "quit", "/quit"}


def parse_arguments(config_obj: Config, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with an LLM from the terminal. The model can call local tools such as a calculator.")
    parser.add_argument("question", nargs="*", help="Ask a single question and exit (interactive mode when omitted)")
    parser.add_argument("-m", "--model", type=str, default=None, help=f"Model identifier to use (Default: {config_obj.DEFAULT_MODEL})")
    parser.add_argument("--system", type=str, default=None, help="Override the system message")
    parser.add_argument("--no-tools", action="store_true", help="Plain chat: do not offer tools to the model")
    parser.add_argument("--max-tool-iterations", type=int, default=None, metavar="N", help="Maximum tool calls per turn (0 for no limit)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--plain", action="store_true", help="Use plain text output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging output.")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    if not debug:
        return
    logging.basicConfig(level=logging.DEBUG,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    for noisy in ("httpx", "httpcore", "openai", "markdown_it"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def apply_arguments(args: argparse.Namespace, config_obj: Config) -> Config:
    """Let command-line flags override environment/.env settings."""
    if args.model:
        config_obj.DEFAULT_MODEL = args.model
    if args.system:
        config_obj.SYSTEM_MESSAGE = args.system
    if args.no_tools:
        config_obj.TOOLS_ENABLED = False
    if args.max_tool_iterations is not None:
        config_obj.MAX_TOOL_ITERATIONS = args.max_tool_iterations
    config_obj.VERBOSE = config_obj.VERBOSE or args.verbose
    config_obj.PLAIN_OUTPUT = config_obj.PLAIN_OUTPUT or args.plain
    return config_obj


def build_session(config_obj: Config, display: ChatDisplay) -> ChatSession:
    client = OpenRouterClient(config_obj.DEFAULT_MODEL, config=config_obj)
    registry = create_default_registry() if config_obj.TOOLS_ENABLED else ToolRegistry()
    return ChatSession(
        client,
        registry,
        system_message=config_obj.SYSTEM_MESSAGE,
        options=ChatOptions.from_config(config_obj),
        max_tool_iterations=config_obj.tool_iteration_limit,
        on_tool_call=display.print_tool_call,
        on_tool_result=display.print_tool_result,
    )


def run_turn(session: ChatSession, display: ChatDisplay, prompt: str, verbose: bool = False) -> bool:
    """Send one prompt and show the reply. Returns False if the turn failed."""
    try:
        result = session.send(prompt)
    except ToolLoopExceededError as e:
        display.print_tool_loop_exceeded(str(e))
        return False
    except ToolChatError as e:
        display.print_error(str(e))
        return False
    display.print_assistant_message(result.reply, result.model)
    if verbose:
        display.print_usage(result.usage)
    return True


def interactive_loop(session: ChatSession, display: ChatDisplay, verbose: bool = False,
                     read_input: Callable[[str], str] | None = None) -> None:
    read_input = read_input or (lambda prompt: display.console.input(prompt))
    display.print_banner()
    while True:
        try:
            user_input = read_input("[bold blue]You:[/bold blue] ").strip()
        except (KeyboardInterrupt, EOFError):
            display.console.print()
            display.print_goodbye()
            return
        if not user_input:
            continue
        if user_input.lower() in EXIT_COMMANDS:
            display.print_goodbye()
            return
        try:
            run_turn(session, display, user_input, verbose=verbose)
        except KeyboardInterrupt:
            display.console.print()
            display.print_goodbye()
            return


def main(argv: list[str] | None = None):
    try:
        config_obj = Config()
    except Exception as e:
        # Pydantic validation errors from malformed environment values
        console.print(f"[bold red]Error initializing configuration:[/bold red] {e}")
        sys.exit(1)
        return

    args = parse_arguments(config_obj, argv)
    configure_logging(args.debug)
    apply_arguments(args, config_obj)

    display = ChatDisplay(console=console, plain=config_obj.PLAIN_OUTPUT)
    try:
        session = build_session(config_obj, display)
    except (ToolChatError, ValueError) as e:
        console.print(f"[bold red]Failed to initialize chat client:[/bold red] {e}")
        if config_obj.VERBOSE:
            traceback.print_exc()
        sys.exit(1)
        return

    if args.question:
        ok = run_turn(session, display, " ".join(args.question).strip(), verbose=config_obj.VERBOSE)
        sys.exit(0 if ok else 1)
        return

    interactive_loop(session, display, verbose=config_obj.VERBOSE)
