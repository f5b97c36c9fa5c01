"""Interactive parameter editor for SQL snippets"""

from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from logger import get_logger
from exceptions import ValidationError
from snippet import SnippetEditor
from interactive_helper import highlight_parameters


class ParameterEditor:
    """Edit one parameter or toggle one line per input, re-detecting after each"""

    def __init__(self, console: Optional[Console] = None, editor: Optional[SnippetEditor] = None,
                 show_preview: bool = True):
        self.console = console or Console()
        self.logger = get_logger(self.__class__.__name__)
        self.editor = editor or SnippetEditor()
        self.show_preview = show_preview

    def run(self, text: str) -> Optional[str]:
        """
        Run the editing loop
        Returns: the edited text on save, None when the user quits
        """
        current = text

        while True:
            self._display(current)

            try:
                choice = Prompt.ask("\n[bold]Parameter # to edit, t # to toggle, s to save, q to quit[/bold]",
                                    console=self.console).strip()
            except (EOFError, KeyboardInterrupt):
                return None

            if choice.lower() == 'q':
                return None
            elif choice.lower() == 's':
                return current

            try:
                current = self._handle_choice(current, choice)
            except ValidationError as e:
                self.console.print(f"[red]{e}[/red]")

    def _handle_choice(self, text: str, choice: str) -> str:
        """Apply a single edit or toggle command to text"""
        parts = choice.split()

        if len(parts) == 2 and parts[0].lower() == 't' and parts[1].isdigit():
            return self.editor.toggle(text, int(parts[1]))

        if len(parts) == 1 and parts[0].isdigit():
            return self._edit_value(text, int(parts[0]))

        self.console.print(f"[yellow]Unknown command: {choice}[/yellow]")
        return text

    def _edit_value(self, text: str, index: int) -> str:
        """Prompt for a new value, prefilled with the control's current seed"""
        controls = {control.index: control for control in self.editor.controls(text)}
        control = controls.get(index)
        if control is None:
            raise ValidationError(f"No parameter #{index}")

        hint = " (YYYY-MM-DD)" if control.input_type == 'date' else ""
        new_value = Prompt.ask(f"[bold yellow]Edit {control.label}{hint}[/bold yellow]",
                               default=control.value, console=self.console)

        if new_value is None or new_value == control.value:
            return text
        return self.editor.set_value(text, index, new_value)

    def _display(self, text: str):
        """Show the highlighted snippet followed by the control table"""
        parameters = self.editor.detect(text)

        if self.show_preview:
            preview = highlight_parameters(text, parameters)
            self.console.print(Panel(preview, title="SQL", expand=False))

        controls = self.editor.renderer.render(parameters)
        self.editor.renderer.print_controls(self.console, controls)

        help_line = Text("  ")
        help_line.append("#", style="dim")
        help_line.append(" edit  ", style="green")
        help_line.append("t #", style="dim")
        help_line.append(" comment/uncomment  ", style="yellow")
        help_line.append("s", style="dim")
        help_line.append(" save  ", style="cyan")
        help_line.append("q", style="dim")
        help_line.append(" quit", style="red")
        self.console.print(help_line)
