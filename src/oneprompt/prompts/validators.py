"""
提示词文档验证器

检查元数据、变量声明、模板引用与条件指令之间的一致性。
遇到第一个错误即停止，不汇总多个错误。
"""

from typing import List
import logging

from .conditionals import find_conditionals
from .errors import PromptValidationError
from .models import Prompt
from .template_engine import extract_template_variables

logger = logging.getLogger(__name__)


def validate_prompt(prompt: Prompt) -> None:
    """
    验证提示词文档

    依次检查：
        1. 元数据 title 非空
        2. 模板中使用的变量均已声明
        3. 可选变量均有默认值，必填变量没有默认值
        4. 条件指令引用的变量已声明
        5. 条件指令引用的片段存在
        6. 变量名非空且唯一
        7. 片段名非空且唯一

    Args:
        prompt: 提示词文档

    Raises:
        PromptValidationError: 验证失败
    """
    if not prompt.metadata.get("title"):
        raise PromptValidationError("Title is required in metadata")

    declared = {variable.name for variable in prompt.variables}

    for var_name in extract_template_variables(prompt.template):
        if var_name not in declared:
            raise PromptValidationError(
                f'Variable "{var_name}" used in template but not declared'
            )

    for variable in prompt.variables:
        if not variable.required and variable.default is None:
            raise PromptValidationError(
                f'Optional variable "{variable.name}" must have a default value'
            )
        if variable.required and variable.default is not None:
            raise PromptValidationError(
                f'Required variable "{variable.name}" must not have a default value'
            )

    part_names = set(prompt.part_names)
    for directive in find_conditionals(prompt.template):
        if directive.var not in declared:
            raise PromptValidationError(
                f'Conditional references undefined variable "{directive.var}"'
            )
        if directive.show not in part_names:
            raise PromptValidationError(
                f'Conditional references undefined part "{directive.show}"'
            )
        if directive.else_part and directive.else_part not in part_names:
            raise PromptValidationError(
                f'Conditional references undefined part "{directive.else_part}"'
            )

    _check_unique_names("Variable", prompt.variable_names)
    _check_unique_names("Part", prompt.part_names)

    logger.debug(f"提示词验证通过: {prompt.title}")


def _check_unique_names(kind: str, names: List[str]) -> None:
    seen = set()
    for name in names:
        if not name:
            raise PromptValidationError(f"{kind} name must not be empty")
        if name in seen:
            raise PromptValidationError(f'Duplicate {kind.lower()} name "{name}"')
        seen.add(name)
