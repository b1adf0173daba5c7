"""
OnePrompt

结构化提示词模板库。
"""

from .prompts import (
    OnePromptError,
    Prompt,
    PromptVariable,
    PromptPart,
    validate,
    parse_from_xml,
    convert_to_xml,
    render_with_variables,
)

__all__ = [
    "OnePromptError",
    "Prompt",
    "PromptVariable",
    "PromptPart",
    "validate",
    "parse_from_xml",
    "convert_to_xml",
    "render_with_variables",
]

__version__ = "1.0.0"
