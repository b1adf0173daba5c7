"""
OnePrompt 门面

对外提供验证、解析、序列化与渲染四个入口。内部异常在此统一包装为
OnePromptError，消息以操作名为前缀并保留原始错误信息。
"""

from typing import Dict, Any, Union
import logging

from .conditionals import process_conditionals
from .errors import OnePromptError
from .markup import parse_xml_tree, tree_to_prompt, prompt_to_tree, build_xml
from .models import Prompt, PromptInputVariables
from .template_engine import substitute_template_variables
from .validators import validate_prompt
from .variables import resolve_variables

logger = logging.getLogger(__name__)


def _wrap(operation: str, error: Exception) -> OnePromptError:
    logger.debug(f"{operation}: {error}")
    return OnePromptError(f"{operation}: {error}")


def _parse(xml: str) -> Prompt:
    prompt = tree_to_prompt(parse_xml_tree(xml))
    validate_prompt(prompt)
    return prompt


def validate(prompt: Prompt) -> None:
    """
    验证提示词文档

    Args:
        prompt: 提示词文档

    Raises:
        OnePromptError: 验证失败

    Example:
        >>> prompt = Prompt(
        ...     metadata={"title": "Test"},
        ...     variables=[PromptVariable(name="user", required=True)],
        ...     template="Hello {{user}}!",
        ... )
        >>> validate(prompt)
    """
    try:
        validate_prompt(prompt)
    except Exception as e:
        raise _wrap("Validation failed", e) from e


def parse_from_xml(xml: str) -> Prompt:
    """
    将 XML 文本解析为 Prompt 并验证

    Args:
        xml: OnePrompt 格式的 XML 文本

    Returns:
        验证通过的 Prompt 对象

    Raises:
        OnePromptError: 解析或验证失败
    """
    try:
        return _parse(xml)
    except Exception as e:
        raise _wrap("Parse failed", e) from e


def convert_to_xml(prompt: Prompt, indent: str = "  ") -> str:
    """
    将 Prompt 序列化为 XML 文本（先验证）

    Args:
        prompt: 提示词文档
        indent: 缩进字符串

    Returns:
        XML 文本

    Raises:
        OnePromptError: 验证或序列化失败
    """
    try:
        validate_prompt(prompt)
        return build_xml(prompt_to_tree(prompt), indent=indent)
    except Exception as e:
        raise _wrap("Conversion to XML failed", e) from e


def render_with_variables(
    source: Union[str, Prompt],
    variables: PromptInputVariables,
) -> str:
    """
    渲染提示词

    先处理条件指令，再替换变量占位符。

    Args:
        source: XML 文本或 Prompt 对象
        variables: 变量取值

    Returns:
        渲染后的文本

    Raises:
        OnePromptError: 解析、验证或变量解析失败
    """
    try:
        prompt = _parse(source) if isinstance(source, str) else source
        validate_prompt(prompt)

        resolved = resolve_variables(prompt.variables, variables)
        processed = process_conditionals(prompt.template.strip(), resolved, prompt.parts)
        rendered = substitute_template_variables(processed, resolved)
    except Exception as e:
        raise _wrap("Render failed", e) from e

    logger.debug(f"渲染完成: {prompt.title} ({len(rendered)} 字符)")
    return rendered


def prompt_to_dict(prompt: Prompt) -> Dict[str, Any]:
    """将 Prompt 转换为普通字典"""
    return prompt.to_dict()


def prompt_from_dict(data: Dict[str, Any]) -> Prompt:
    """
    由普通字典构建 Prompt 并验证

    Raises:
        OnePromptError: 字段缺失或验证失败
    """
    try:
        prompt = Prompt.from_dict(data)
        validate_prompt(prompt)
        return prompt
    except Exception as e:
        raise _wrap("Validation failed", e) from e
