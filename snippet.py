"""
Entry point for editing SQL snippet parameters.

Every method takes the current text and returns a new one. Parameters are
re-detected on each call, so no offsets survive from one edit to the next.
"""

from typing import List

from logger import get_logger
from exceptions import ValidationError
from parameters import Parameter, ParameterDetector
from substitution import SubstitutionEngine
from comments import CommentToggler
from renderer import ParameterRenderer, ParameterControl


class SnippetEditor:
    """Threads a SQL buffer through detection, substitution and toggling"""

    def __init__(self, detector=None, engine=None, toggler=None, renderer=None):
        self.logger = get_logger(self.__class__.__name__)
        self.detector = detector or ParameterDetector()
        self.engine = engine or SubstitutionEngine()
        self.toggler = toggler or CommentToggler()
        self.renderer = renderer or ParameterRenderer()

    def detect(self, text: str) -> List[Parameter]:
        return self.detector.detect_parameters(text)

    def controls(self, text: str) -> List[ParameterControl]:
        return self.renderer.render(self.detect(text))

    def set_value(self, text: str, index: int, value: str) -> str:
        """Apply one new value to the parameter at index"""
        param = self._parameter_at(text, index)
        updated = self.engine.apply(text, param, value)
        if updated == text:
            self.logger.debug(f"Value for '{param.field}' left text unchanged")
        else:
            self.logger.info(f"Updated '{param.field}': '{param.value}' -> '{value}'")
        return updated

    def toggle(self, text: str, index: int) -> str:
        """Comment or uncomment the line owning the parameter at index"""
        param = self._parameter_at(text, index)
        return self.toggler.toggle_parameter(text, param)

    def toggle_line(self, text: str, line_start: int) -> str:
        return self.toggler.toggle_line(text, line_start)

    def _parameter_at(self, text: str, index: int) -> Parameter:
        parameters = self.detect(text)
        if not 0 <= index < len(parameters):
            raise ValidationError(
                f"Parameter index {index} out of range (found {len(parameters)} parameters)"
            )
        return parameters[index]
