"""
Line comment state and toggling for SQL snippets.
"""

from typing import Tuple

from logger import get_logger
from constants import COMMENT_MARKER, COMMENT_PREFIX


def resolve_comment_state(text: str, offset: int) -> Tuple[int, bool]:
    """Return (line_start, is_commented) for the line containing offset.

    A line counts as commented when a ``--`` appears on it before offset.
    """
    line_start = text.rfind('\n', 0, offset) + 1
    comment_pos = text.find(COMMENT_MARKER, line_start)
    return line_start, (comment_pos != -1 and comment_pos < offset)


class CommentToggler:
    """Flips the ``--`` prefix of a single line in place"""

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def toggle_line(self, text: str, line_start: int) -> str:
        """Comment or uncomment the line starting at line_start"""
        if line_start < 0 or line_start >= len(text):
            self.logger.error(f"Invalid line start offset for toggle: {line_start}")
            return text
        if line_start > 0 and text[line_start - 1] != '\n':
            self.logger.error(f"Offset {line_start} is not at the start of a line")
            return text

        line_end = text.find('\n', line_start)
        end = len(text) if line_end == -1 else line_end
        line = text[line_start:end]
        stripped = line.lstrip()

        if stripped.startswith(COMMENT_MARKER):
            marker = line.index(COMMENT_MARKER)
            cut = marker + len(COMMENT_MARKER)
            if line[cut:cut + 1] == ' ':
                cut += 1
            new_line = line[:marker] + line[cut:]
            self.logger.debug(f"Uncommented line at offset {line_start}")
        else:
            indentation = line[:len(line) - len(stripped)]
            new_line = indentation + COMMENT_PREFIX + stripped
            self.logger.debug(f"Commented line at offset {line_start}")

        return text[:line_start] + new_line + text[end:]

    def toggle_parameter(self, text: str, param) -> str:
        """Toggle the line that owns a detected parameter"""
        return self.toggle_line(text, param.line_start)
