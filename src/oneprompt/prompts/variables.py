"""
变量解析

将变量声明与调用方提供的输入值合并，补齐默认值。
"""

from typing import Dict, Iterable
import logging

from .errors import MissingRequiredVariableError
from .models import PromptVariable, PromptInputVariables, ResolvedVariables

logger = logging.getLogger(__name__)


def resolve_variables(
    declared: Iterable[PromptVariable],
    input_values: PromptInputVariables,
) -> ResolvedVariables:
    """
    解析变量取值

    按声明顺序处理：输入中存在该键（即使为空字符串）则使用输入值；
    否则必填变量立即报错，可选变量使用默认值。未声明的输入键被忽略。

    Args:
        declared: 变量声明
        input_values: 输入值

    Returns:
        覆盖所有已声明变量的取值字典

    Raises:
        MissingRequiredVariableError: 缺少必填变量
    """
    resolved: Dict[str, str] = {}

    for variable in declared:
        if variable.name in input_values:
            resolved[variable.name] = input_values[variable.name]
        elif variable.required:
            raise MissingRequiredVariableError(variable.name)
        else:
            resolved[variable.name] = variable.default

    ignored = set(input_values) - set(resolved)
    if ignored:
        logger.debug(f"忽略未声明的输入变量: {sorted(ignored)}")

    return resolved
