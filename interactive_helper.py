"""
Helper methods for the interactive parameter editor.
"""

from typing import List
from rich.text import Text
from parameters import Parameter


def highlight_parameters(text: str, parameters: List[Parameter], base_style: str = "white") -> Text:
    """Highlight detected clauses in a SQL snippet"""
    if not parameters:
        return Text(text, style=base_style)
    
    result = Text()
    last_end = 0
    
    for param in sorted(parameters, key=lambda p: p.start):
        if param.start < last_end:
            continue
        if param.start > last_end:
            result.append(text[last_end:param.start], style=base_style)
        param_style = "dim yellow" if param.is_commented else "bold yellow"
        result.append(text[param.start:param.end], style=param_style)
        last_end = param.end
    
    # Add remaining text after the last parameter
    if last_end < len(text):
        result.append(text[last_end:], style=base_style)
    
    return result
