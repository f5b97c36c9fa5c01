"""
Format-preserving rewrite of a single detected SQL literal.
"""

import re
from typing import List

from logger import get_logger
from exceptions import SubstitutionError
from parameters import Parameter, ParameterKind
from date_format import detect_format, parse_iso, render


def quote_literal(value: str) -> str:
    """Wrap value in single quotes, doubling any embedded quote"""
    return "'" + value.replace("'", "''") + "'"


class SubstitutionEngine:
    """Writes a new value for one parameter back into the SQL text.

    Each call works against the exact text the parameter was detected in.
    When the literal can't be found where detection put it, the engine falls
    back to replacing every quoted occurrence of the old value.
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def apply(self, text: str, param: Parameter, new_value: str) -> str:
        """Return text with param's literal replaced by new_value"""
        replacement = self._prepare_value(param, new_value)

        try:
            if param.kind == ParameterKind.IN_CLAUSE:
                return self._replace_in_clause(text, param, replacement)
            elif param.kind == ParameterKind.BETWEEN_START:
                return self._replace_between_bound(text, param, 'between', replacement)
            elif param.kind == ParameterKind.BETWEEN_END:
                return self._replace_between_bound(text, param, 'and', replacement)
            else:
                return self._replace_simple(text, param, replacement)
        except Exception as e:
            self.logger.warning(
                f"Targeted replace failed for '{param.field}' ({e}); "
                f"replacing every occurrence of '{param.value}'"
            )
            return self._replace_everywhere(text, param.value, replacement)

    def _prepare_value(self, param: Parameter, new_value: str) -> str:
        """Re-render date input in the style of the literal being replaced"""
        if not param.is_date or parse_iso(new_value) is None:
            return new_value

        signature = detect_format(param.value)
        if signature is None:
            self.logger.debug(f"No date style detected for '{param.value}', inserting '{new_value}' as is")
            return new_value
        return render(new_value, signature)

    def _replace_in_clause(self, text: str, param: Parameter, replacement: str) -> str:
        """Rebuild the member list of an IN clause"""
        members = self._build_members(replacement)
        clause_re = re.compile(r'(?:\w+\.)?' + re.escape(param.field) + r'\s+in\s*\([^)]*\)', re.IGNORECASE)
        match = clause_re.match(text, param.clause_start)

        if match:
            new_clause = self._rebuild_clause(match.group(0), members)
            return text[:match.start()] + new_clause + text[match.end():]

        self.logger.warning(f"Could not locate IN clause for '{param.field}' at offset {param.clause_start}, "
                            f"falling back to clause text replace")
        if param.clause not in text:
            raise SubstitutionError(f"IN clause for '{param.field}' not found")
        return text.replace(param.clause, self._rebuild_clause(param.clause, members), 1)

    def _replace_between_bound(self, text: str, param: Parameter, keyword: str, replacement: str) -> str:
        """Replace one side of a BETWEEN clause"""
        bound_re = re.compile(r'(' + keyword + r"\s+)'" + re.escape(param.value) + "'", re.IGNORECASE)
        match = bound_re.search(text, param.start)
        if not match:
            raise SubstitutionError(f"'{keyword} '{param.value}'' not found after offset {param.start}")
        return text[:match.start()] + match.group(1) + quote_literal(replacement) + text[match.end():]

    def _replace_simple(self, text: str, param: Parameter, replacement: str) -> str:
        """Replace the first quoted occurrence of the value at or after the clause"""
        old = quote_literal(param.value)
        pos = text.find(old, param.start)
        if pos == -1:
            raise SubstitutionError(f"{old} not found after offset {param.start}")
        return text[:pos] + quote_literal(replacement) + text[pos + len(old):]

    def _replace_everywhere(self, text: str, old_value: str, replacement: str) -> str:
        old_re = re.compile("'" + re.escape(old_value) + "'")
        new_literal = quote_literal(replacement)
        return old_re.sub(lambda m: new_literal, text)

    @staticmethod
    def _build_members(value: str) -> List[str]:
        return [quote_literal(member.strip()) for member in value.split(',')]

    @staticmethod
    def _rebuild_clause(clause: str, members: List[str]) -> str:
        """Swap the parenthesised list of a clause, keeping the ``field in`` prefix"""
        joined = ', '.join(members)
        return re.sub(r'\([^)]*\)', lambda m: f'({joined})', clause, count=1)
