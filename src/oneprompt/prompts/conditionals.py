"""
条件指令处理

模板中的条件指令形如：

    <oneprompt:if var="tone" equals="formal" show="formal_greeting" else="casual_greeting" />

变量取值与 equals 完全相等时替换为 show 片段内容，否则替换为 else 片段内容
（未指定 else 时替换为空字符串）。只支持单层、扁平的条件，不支持嵌套与组合。
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Iterable
import logging

from .models import PromptPart

logger = logging.getLogger(__name__)

# 属性顺序固定；"oneprompt:" 前缀可省略
CONDITIONAL_PATTERN = re.compile(
    r'<(?:oneprompt:)?if\s+var="([^"]+)"\s+equals="([^"]+)"\s+show="([^"]+)"'
    r'(?:\s+else="([^"]+)")?\s*/>'
)


@dataclass(frozen=True)
class ConditionalDirective:
    """模板中的一条条件指令"""
    var: str
    equals: str
    show: str
    else_part: Optional[str] = None

    def select(self, value: Optional[str]) -> Optional[str]:
        """根据变量取值选择片段名"""
        if value == self.equals:
            return self.show
        return self.else_part


def _directive_from_match(match) -> ConditionalDirective:
    var, equals, show, else_part = match.groups()
    return ConditionalDirective(var=var, equals=equals, show=show, else_part=else_part)


def find_conditionals(template: str) -> List[ConditionalDirective]:
    """
    查找模板中的全部条件指令

    Args:
        template: 模板字符串

    Returns:
        按出现顺序排列的条件指令
    """
    return [_directive_from_match(m) for m in CONDITIONAL_PATTERN.finditer(template)]


def process_conditionals(
    template: str,
    variables: Dict[str, str],
    parts: Iterable[PromptPart],
) -> str:
    """
    处理模板中的条件指令

    引用的片段不存在时按空字符串处理；插入的片段内容不会被再次扫描。

    Args:
        template: 模板字符串
        variables: 已解析的变量取值
        parts: 可用片段

    Returns:
        条件指令被替换后的模板
    """
    parts_map = {part.name: part.content for part in parts}

    def replace_conditional(match):
        directive = _directive_from_match(match)
        part_name = directive.select(variables.get(directive.var))
        if not part_name:
            return ""
        if part_name not in parts_map:
            logger.debug(f"条件指令引用的片段不存在，按空内容处理: {part_name}")
        return parts_map.get(part_name, "")

    return CONDITIONAL_PATTERN.sub(replace_conditional, template)
