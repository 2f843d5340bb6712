"""
REPL (Read-Eval-Print Loop) for interactive SQL statements.

Provides the command-line interface: an interactive shell, or a one-shot
run of a single statement with -e.
"""

import argparse
import select
import sys
import traceback
from typing import Dict, List

from .config import RENDER_MODES, configure_logging, load_settings
from .executor.sql_executor import SqlExecutor
from .utils.exceptions import SqlResultError
from .utils.validators import is_statement_complete


def stdin_has_data() -> bool:
    """True when more input is already buffered, as during a paste."""
    if not sys.stdin.isatty():
        return True
    try:
        ready, _, _ = select.select([sys.stdin], [], [], 0)
    except (ValueError, OSError, TypeError):
        return False
    return bool(ready)


def read_line(prompt: str, quiet_when_pasting: bool = False) -> str:
    """
    Read one line straight from stdin, without readline.

    Continuation prompts are left out while pasted text is still
    arriving, so they do not end up interleaved with the statement.

    Raises:
        EOFError: When stdin is exhausted
    """
    if quiet_when_pasting and stdin_has_data():
        prompt = ""
    sys.stdout.write(prompt)
    sys.stdout.flush()

    line = sys.stdin.readline()
    if line == "":
        raise EOFError()
    return line.rstrip("\r\n")


def print_banner():
    """Print welcome banner."""
    print("=" * 60)
    print("  sqlresult - Interactive SQL Shell")
    print("=" * 60)
    print("Type SQL statements or special commands:")
    print("  Multi-line input supported - end with semicolon (;)")
    print("  .help     - Show help")
    print("  .mode brackets|grid - Choose how rows are shown")
    print("  .exit or .quit - Exit REPL")
    print("=" * 60)
    print()


def print_help():
    """Print help message."""
    print("\n--- Help ---")
    print("Any single SQL statement the driver accepts, ended with ';'.")
    print("Queries print their rows; other statements print the affected-row count.")
    print("\nSpecial Commands:")
    print("  .help     - Show this help")
    print("  .mode     - Show the current display mode")
    print("  .mode brackets|grid - Change the display mode")
    print("  .exit / .quit - Exit REPL")
    print()


def handle_special_command(command: str, session: Dict[str, str]) -> bool:
    """
    Handle special REPL commands (starting with .).

    Args:
        command: Command string
        session: Mutable session state ('mode')

    Returns:
        True if should continue REPL, False to exit
    """
    command = command.strip().rstrip(';').lower()

    if command in ['.exit', '.quit']:
        print("Goodbye!")
        return False

    elif command == '.help':
        print_help()

    elif command.startswith('.mode'):
        parts = command.split()
        if len(parts) < 2:
            print(f"Mode: {session['mode']}\n")
        elif parts[1] in RENDER_MODES:
            session['mode'] = parts[1]
            print(f"Mode set to {parts[1]}\n")
        else:
            print(f"Usage: .mode {'|'.join(RENDER_MODES)}\n")

    else:
        print(f"Unknown command: {command}")
        print("Type .help for available commands\n")

    return True


def run_statement(executor: SqlExecutor, sql: str, mode: str = "brackets") -> str:
    """
    Execute one statement, render it, and release it.

    Returns:
        Text to show the user

    Raises:
        SqlResultError: If the statement could not be executed or rendered
    """
    with executor.execute(sql) as result:
        if mode == "grid":
            text = result.render_table()
        else:
            text = result.render()
        if text is None:
            raise result.last_error
    return text


def repl(executor: SqlExecutor, mode: str = "brackets"):
    """
    Run the interactive REPL.

    Reads SQL statements, executes them, and displays results.
    Supports multi-line input - continues reading until semicolon is found.
    """
    print_banner()
    session = {'mode': mode}

    # Main loop
    while True:
        try:
            # Read command (possibly multi-line)
            sql_lines = []
            is_continuation = False

            while True:
                try:
                    if is_continuation:
                        # Suppress continuation prompt during paste
                        line = read_line("    -> ", quiet_when_pasting=True).strip()
                    else:
                        line = read_line("sql> ").strip()
                except EOFError:
                    print("\nGoodbye!")
                    return

                # Accumulate non-empty lines
                if line:
                    sql_lines.append(line)

                    # Check if this is a special command
                    if line.startswith('.') and not is_continuation:
                        break

                    # Check if statement is complete (ends with semicolon)
                    if is_statement_complete(line):
                        break

                    # Continue reading
                    is_continuation = True
                else:
                    # Empty line with no accumulated content
                    if not sql_lines:
                        break
                    # Empty line in middle of statement, continue
                    is_continuation = True

            # Join all lines into complete SQL statement
            sql = '\n'.join(sql_lines)

            if not sql:
                continue

            # Handle special commands
            if sql.startswith('.'):
                if not handle_special_command(sql, session):
                    break
                continue

            try:
                print(run_statement(executor, sql, session['mode']))
                print()
            except SqlResultError as e:
                print(f"Error: {e}\n")
                continue

        except KeyboardInterrupt:
            print("\n\nInterrupted. Type .exit to quit.\n")
            continue
        except Exception as e:
            print(f"Unexpected error: {e}\n")
            traceback.print_exc()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlresult",
        description="Execute SQL statements and print their outcome.",
    )
    parser.add_argument("-e", "--execute", metavar="SQL",
                        help="run one statement and exit")
    parser.add_argument("--driver", help="DB-API module name (default: sqlite3)")
    parser.add_argument("--database", help="database passed to the driver's connect()")
    parser.add_argument("--mode", choices=RENDER_MODES, help="display mode")
    parser.add_argument("--log-level", help="logging level (default: WARNING)")
    return parser


def main(argv: List[str] = None) -> int:
    """Command-line entry point. Returns the process exit status."""
    args = build_arg_parser().parse_args(argv)

    try:
        settings = load_settings(driver=args.driver, database=args.database,
                                 log_level=args.log_level, render_mode=args.mode)
        configure_logging(settings.log_level)
        executor = SqlExecutor.from_settings(settings)
    except SqlResultError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with executor:
        if args.execute is None:
            repl(executor, settings.render_mode)
            return 0

        try:
            print(run_statement(executor, args.execute, settings.render_mode))
        except SqlResultError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


# Entry point for running as module
if __name__ == "__main__":
    sys.exit(main())
