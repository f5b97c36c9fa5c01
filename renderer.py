"""Turns detected parameters into editor controls"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Set, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from logger import get_logger
from parameters import Parameter, ParameterKind
from date_format import to_iso
from constants import TOGGLE_COMMENT_LABEL, TOGGLE_UNCOMMENT_LABEL


@dataclass
class ParameterControl:
    """One editable row in the parameter editor"""
    index: int
    label: str
    kind: ParameterKind
    input_type: str  # 'date' or 'text'
    value: str  # Seed shown in the input
    original_value: str  # Literal as found in the text, for change detection
    is_commented: bool
    toggle_label: str
    dimmed: bool
    line_start: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = asdict(self)
        data['kind'] = self.kind.value
        return data


class ParameterRenderer:
    """Builds the control list for a parameter set"""

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def render(self, parameters: List[Parameter]) -> List[ParameterControl]:
        """Create one control per parameter, skipping repeated spans"""
        controls = []
        seen: Set[Tuple[int, int]] = set()

        for index, param in enumerate(parameters):
            span = (param.start, param.end)
            if span in seen:
                self.logger.debug(f"Skipping duplicate control for span {span}")
                continue
            seen.add(span)
            controls.append(self._build_control(index, param))

        return controls

    def _build_control(self, index: int, param: Parameter) -> ParameterControl:
        if param.is_date:
            input_type = 'date'
            seed = to_iso(param.value) or ''
        else:
            input_type = 'text'
            seed = param.value

        return ParameterControl(
            index=index,
            label=param.field,
            kind=param.kind,
            input_type=input_type,
            value=seed,
            original_value=param.value,
            is_commented=param.is_commented,
            toggle_label=TOGGLE_UNCOMMENT_LABEL if param.is_commented else TOGGLE_COMMENT_LABEL,
            dimmed=param.is_commented,
            line_start=param.line_start,
        )

    def build_table(self, controls: List[ParameterControl]) -> Table:
        """Build a rich table of controls"""
        table = Table(show_header=True, header_style="bold cyan", expand=False)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Field", style="bold")
        table.add_column("Type")
        table.add_column("Value", style="yellow")
        table.add_column("Action")

        for control in controls:
            action_style = "green" if control.is_commented else "red"
            table.add_row(
                str(control.index),
                escape(control.label),
                control.input_type,
                escape(control.value or control.original_value),
                f"[{action_style}]{control.toggle_label}[/{action_style}]",
                style="dim" if control.dimmed else None,
            )

        return table

    def print_controls(self, console: Console, controls: List[ParameterControl]):
        """Print the control table, or a notice when there is nothing to edit"""
        if not controls:
            console.print("[yellow]No parameters found[/yellow]")
            return
        console.print(self.build_table(controls))
