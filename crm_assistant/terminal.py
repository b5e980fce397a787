"""
Terminal output and input helpers for the interactive assistant.

Input helpers let KeyboardInterrupt and EOFError propagate so the CLI entry
point can exit cleanly.
"""

import sys
from typing import Optional


# ANSI colors
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"


def color(text: str, *codes) -> str:
    """Apply color codes to text."""
    if not sys.stdout.isatty():
        return text
    return "".join(codes) + text + Colors.RESET


BOX_WIDTH = 47


def print_box(title: str, *codes, subtitle: Optional[str] = None):
    """Print a title (and optional subtitle) inside a single-line box."""
    print()
    print("┌" + "─" * BOX_WIDTH + "┐")
    print("│ " + color(title.ljust(BOX_WIDTH - 2), *codes) + " │")
    if subtitle:
        print("│ " + color(subtitle.ljust(BOX_WIDTH - 2), Colors.GRAY) + " │")
    print("└" + "─" * BOX_WIDTH + "┘")
    print()


def print_header(title: str):
    """Print a section header."""
    print()
    print(color(f"◆ {title}", Colors.CYAN, Colors.BOLD))


def print_info(text: str):
    """Print info text."""
    print(color(f"  {text}", Colors.DIM))


def print_success(text: str):
    """Print success message."""
    print(color(f"✓ {text}", Colors.GREEN))


def print_warning(text: str):
    """Print warning message."""
    print(color(f"⚠ {text}", Colors.YELLOW))


def print_error(text: str):
    """Print error message."""
    print(color(f"✗ {text}", Colors.RED))


def prompt(question: str, default: Optional[str] = None) -> str:
    """Prompt for a single line with optional default."""
    if default:
        display = f"{question} [{default}]: "
    else:
        display = f"{question}: "
    value = input(color(display, Colors.YELLOW))
    return value.strip() or default or ""


def prompt_multiline(question: str) -> str:
    """Prompt for free text; an empty line ends the input."""
    print(color(f"{question} (finish with an empty line)", Colors.YELLOW))
    lines = []
    while True:
        line = input()
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines).strip()


def prompt_choice(question: str, choices: dict[str, str], default: int = 0) -> str:
    """
    Prompt for one of several choices.

    Args:
        question: Question to print.
        choices: Mapping of key to label, displayed in order.
        default: Index selected on empty input.

    Returns:
        The key of the selected choice.
    """
    keys = list(choices)
    print(color(question, Colors.YELLOW))

    for i, key in enumerate(keys):
        marker = "●" if i == default else "○"
        if i == default:
            print(color(f"  {marker} {choices[key]}", Colors.GREEN))
        else:
            print(f"  {marker} {choices[key]}")

    while True:
        value = input(color(f"  Select [1-{len(keys)}] ({default + 1}): ", Colors.DIM))
        if not value.strip():
            return keys[default]
        try:
            idx = int(value) - 1
        except ValueError:
            print_error("Please enter a number")
            continue
        if 0 <= idx < len(keys):
            return keys[idx]
        print_error(f"Please enter a number between 1 and {len(keys)}")


def prompt_multi_choice(question: str, options: list[str], defaults: list[str]) -> list[str]:
    """Prompt for several options as comma separated numbers; keeps option order."""
    print(color(question, Colors.YELLOW))
    for i, option in enumerate(options):
        marker = "■" if option in defaults else "□"
        print(f"  {marker} {i + 1}. {option}")

    default_str = ",".join(str(options.index(d) + 1) for d in defaults)
    while True:
        value = input(color(f"  Select numbers, comma separated ({default_str}): ", Colors.DIM))
        if not value.strip():
            return list(defaults)
        try:
            picked = {int(part) - 1 for part in value.split(",") if part.strip()}
        except ValueError:
            print_error("Please enter numbers separated by commas")
            continue
        if picked and all(0 <= idx < len(options) for idx in picked):
            return [option for i, option in enumerate(options) if i in picked]
        print_error(f"Please enter numbers between 1 and {len(options)}")


def prompt_yes_no(question: str, default: bool = True) -> bool:
    """Prompt for yes/no."""
    default_str = "Y/n" if default else "y/N"

    while True:
        value = input(color(f"{question} [{default_str}]: ", Colors.YELLOW)).strip().lower()

        if not value:
            return default
        if value in ('y', 'yes'):
            return True
        if value in ('n', 'no'):
            return False
        print_error("Please enter 'y' or 'n'")
