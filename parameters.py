"""
SQL filter literal detection for stored snippets.
"""

import re
from enum import Enum
from typing import List, Optional, Tuple
from dataclasses import dataclass, field as dataclass_field

from logger import get_logger
from comments import resolve_comment_state
from date_format import is_date_literal
from constants import (
    BETWEEN_PATTERN, IN_PATTERN, EQ_LIKE_PATTERN,
    BETWEEN_FROM_SUFFIX, BETWEEN_TO_SUFFIX,
)


class ParameterKind(Enum):
    """Substitution strategy for a detected parameter"""
    SIMPLE = "simple"
    IN_CLAUSE = "in"
    BETWEEN_START = "between_start"
    BETWEEN_END = "between_end"


@dataclass
class Parameter:
    """Represents a detected literal in a SQL snippet"""
    field: str  # Column name, qualifier dropped
    kind: ParameterKind
    value: str  # Literal text without quotes
    start: int  # Span owned by this parameter
    end: int
    clause_start: int  # Span of the whole clause
    clause_end: int
    clause: str
    line_start: int  # Start of the line holding the clause
    is_date: bool = False
    is_commented: bool = False
    original_values: List[str] = dataclass_field(default_factory=list)
    between_start_value: Optional[str] = None
    between_end_value: Optional[str] = None


class ParameterDetector:
    """Detects and extracts editable literals from SQL text.

    Every call scans the text from scratch. Offsets on the returned
    parameters are only valid for the exact text they were detected in.
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)
        self.between_pattern = re.compile(BETWEEN_PATTERN, re.IGNORECASE)
        self.in_pattern = re.compile(IN_PATTERN, re.IGNORECASE)
        self.eq_like_pattern = re.compile(EQ_LIKE_PATTERN, re.IGNORECASE)

    def detect_parameters(self, text: str) -> List[Parameter]:
        """Detect all parameters in a SQL snippet"""
        reserved: List[Tuple[int, int]] = []
        parameters: List[Parameter] = []

        # Order matters: earlier categories reserve their clause spans
        parameters.extend(self._find_between_parameters(text, reserved))
        parameters.extend(self._find_in_parameters(text, reserved))
        parameters.extend(self._find_eq_like_parameters(text, reserved))

        parameters.sort(key=lambda p: p.start)
        self.logger.debug(f"Detected {len(parameters)} parameters")
        return parameters

    def _find_between_parameters(self, text: str, reserved: List[Tuple[int, int]]) -> List[Parameter]:
        """Find ``col BETWEEN 'a' AND 'b'`` clauses, two rows per clause"""
        parameters = []

        for match in self.between_pattern.finditer(text):
            start, end = match.start(), match.end()
            reserved.append((start, end))
            line_start, is_commented = resolve_comment_state(text, start)
            column = self._column_name(match.group(1))
            low, high = match.group(2), match.group(3)
            # The From row owns up to its closing quote, the To row the rest
            split = match.end(2) + 1

            parameters.append(Parameter(
                field=column + BETWEEN_FROM_SUFFIX,
                kind=ParameterKind.BETWEEN_START,
                value=low,
                start=start,
                end=split,
                clause_start=start,
                clause_end=end,
                clause=match.group(0),
                line_start=line_start,
                is_date=True,
                is_commented=is_commented,
                between_end_value=high,
            ))
            parameters.append(Parameter(
                field=column + BETWEEN_TO_SUFFIX,
                kind=ParameterKind.BETWEEN_END,
                value=high,
                start=split,
                end=end,
                clause_start=start,
                clause_end=end,
                clause=match.group(0),
                line_start=line_start,
                is_date=True,
                is_commented=is_commented,
                between_start_value=low,
            ))

        return parameters

    def _find_in_parameters(self, text: str, reserved: List[Tuple[int, int]]) -> List[Parameter]:
        """Find ``col IN (...)`` clauses"""
        parameters = []

        for match in self.in_pattern.finditer(text):
            start, end = match.start(), match.end()
            if self._overlaps(start, end, reserved):
                continue
            reserved.append((start, end))
            line_start, is_commented = resolve_comment_state(text, start)
            members = self.split_members(match.group(2))

            parameters.append(Parameter(
                field=self._column_name(match.group(1)),
                kind=ParameterKind.IN_CLAUSE,
                value=', '.join(members),
                start=start,
                end=end,
                clause_start=start,
                clause_end=end,
                clause=match.group(0),
                line_start=line_start,
                is_commented=is_commented,
                original_values=members,
            ))

        return parameters

    def _find_eq_like_parameters(self, text: str, reserved: List[Tuple[int, int]]) -> List[Parameter]:
        """Find ``col = 'x'`` and ``col LIKE 'x'`` clauses, optionally parenthesised"""
        parameters = []

        for match in self.eq_like_pattern.finditer(text):
            start, end = match.start(), match.end()
            if self._overlaps(start, end, reserved):
                continue
            reserved.append((start, end))
            line_start, is_commented = resolve_comment_state(text, start)
            value = match.group(3)

            parameters.append(Parameter(
                field=self._column_name(match.group(1)),
                kind=ParameterKind.SIMPLE,
                value=value,
                start=start,
                end=end,
                clause_start=start,
                clause_end=end,
                clause=match.group(0),
                line_start=line_start,
                is_date=is_date_literal(value),
                is_commented=is_commented,
            ))

        return parameters

    @staticmethod
    def split_members(members: str) -> List[str]:
        """Split an IN-list body into unquoted members"""
        values = []
        for member in members.split(','):
            member = member.strip()
            if len(member) >= 2 and member.startswith("'") and member.endswith("'"):
                member = member[1:-1]
            values.append(member)
        return values

    @staticmethod
    def _column_name(identifier: str) -> str:
        return identifier.split('.')[-1]

    @staticmethod
    def _overlaps(start: int, end: int, reserved: List[Tuple[int, int]]) -> bool:
        return any(start < r_end and end > r_start for r_start, r_end in reserved)
