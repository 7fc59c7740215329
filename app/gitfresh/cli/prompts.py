"""Interactive selection of environment files to protect.

Rendered with Rich prompts. Choosing "select" asks for every file
individually, defaulting to keeping it safe.
"""

from collections.abc import Sequence

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from gitfresh.protection.resolver import (
    ProtectAll,
    ProtectNone,
    ProtectSelected,
    SecretChoice,
    SecretSelection,
)
from gitfresh.utils.formatting import console

_CHOICE_HELP: dict[SecretChoice, str] = {
    SecretChoice.ALL: "protect all (recommended)",
    SecretChoice.SELECT: "select individually",
    SecretChoice.NONE: "protect none (remove all)",
}


def prompt_secret_selection(detected: Sequence[str]) -> SecretSelection:
    """Ask which detected environment files to protect.

    Args:
        detected: Environment files found in the working tree.

    Returns:
        The selection strategy chosen by the user.
    """
    console.print("\n[warning]Environment files detected:[/]")
    for path in detected:
        console.print(f"   [muted]{escape(path)}[/]")
    for choice, help_text in _CHOICE_HELP.items():
        console.print(f"  [bold]{choice.value}[/] - {help_text}")

    answer = Prompt.ask(
        "What would you like to do with these environment files?",
        choices=[choice.value for choice in SecretChoice],
        default=SecretChoice.ALL.value,
        console=console,
    )
    choice = SecretChoice(answer)

    if choice == SecretChoice.ALL:
        return ProtectAll()
    if choice == SecretChoice.NONE:
        return ProtectNone()

    selected = [
        path
        for path in detected
        if Confirm.ask(f"Keep [bold]{escape(path)}[/] safe?", default=True, console=console)
    ]
    return ProtectSelected(paths=tuple(selected))
