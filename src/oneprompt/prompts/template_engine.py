"""
提示词模板引擎

负责 {{variable}} 占位符的提取与替换。
"""

import re
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)

# 变量占位符: {{name}}，内部不允许出现 "}"
VAR_PATTERN = re.compile(r'\{\{([^}]+)\}\}')


def extract_template_variables(template: str) -> List[str]:
    """
    提取模板中引用的变量名

    按出现顺序返回，保留重复项，并去除花括号内的首尾空白。

    Args:
        template: 模板字符串

    Returns:
        变量名列表

    Example:
        >>> extract_template_variables("Hello {{name}}, age: {{ age }}")
        ['name', 'age']
    """
    return [match.group(1).strip() for match in VAR_PATTERN.finditer(template)]


def substitute_template_variables(template: str, variables: Dict[str, str]) -> str:
    """
    用变量值替换模板中的占位符

    取值为空字符串或未提供的占位符会原样保留（包括花括号）。

    Args:
        template: 模板字符串
        variables: 变量取值

    Returns:
        替换后的字符串
    """
    def replace_var(match):
        var_name = match.group(1).strip()
        value = variables.get(var_name)
        if not value:
            # NOTE: 空字符串与缺失同样保留占位符
            return match.group(0)
        return value

    return VAR_PATTERN.sub(replace_var, template)
