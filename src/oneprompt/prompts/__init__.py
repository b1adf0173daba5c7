"""
提示词模板系统

结构化提示词文档（元数据 + 变量声明 + 内容片段 + 模板正文）的解析、验证与渲染。
"""

from .errors import OnePromptError
from .models import Prompt, PromptVariable, PromptPart, PromptInputVariables
from .prompt import (
    validate,
    parse_from_xml,
    convert_to_xml,
    render_with_variables,
    prompt_to_dict,
    prompt_from_dict,
)
from .template_engine import extract_template_variables, substitute_template_variables
from .variables import resolve_variables
from .conditionals import process_conditionals, find_conditionals, ConditionalDirective

__all__ = [
    "OnePromptError",
    "Prompt",
    "PromptVariable",
    "PromptPart",
    "PromptInputVariables",
    "validate",
    "parse_from_xml",
    "convert_to_xml",
    "render_with_variables",
    "prompt_to_dict",
    "prompt_from_dict",
    "extract_template_variables",
    "substitute_template_variables",
    "resolve_variables",
    "process_conditionals",
    "find_conditionals",
    "ConditionalDirective",
]
