"""
XML 标记读写

XML 文本与中间树（通用字典）之间的转换，以及中间树与 Prompt 之间的转换。

中间树结构：

    {
        "metadata": {"title": "...", ...},
        "variables": {"var": [{"@name": "x", "@required": "true", "#text": "..."}]},
        "part": [{"@name": "p", "#text": "..."}],
        "template": "...",
    }

"variables.var" 与 "part" 既可以是单个条目也可以是列表，构建 Prompt 前统一规整为列表。
template 与 part 为原样节点：其内部文本不做 XML 解析，保证嵌入的标签与指令原样保留。
"""

import re
import xml.etree.ElementTree as ET
from typing import Dict, Any, Optional, List
import logging

from .errors import MarkupError
from .models import Prompt, PromptVariable, PromptPart

logger = logging.getLogger(__name__)

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'

_PROLOG_PATTERN = re.compile(r'^\s*<\?xml[^>]*\?>')
# 原样节点：<template ...>raw</template>、<part name="x">raw</part> 或自闭合形式；
# 注释一并匹配并丢弃，原样节点内部的注释随节点内容保留
_RAW_NODE_PATTERN = re.compile(
    r'<!--.*?-->|<(template|part)(\s[^>]*?)?(?:/>|>(.*?)</\1\s*>)',
    re.DOTALL,
)
# <var> 开始标签，第 1 组为 "/" 表示自闭合
_VAR_TAG_PATTERN = re.compile(r'<var(?=[\s/>])[^>]*?(/?)>')
_TAG_NAME_PATTERN = re.compile(r'^[A-Za-z_][\w.-]*$')
_ROOT_TAG = "oneprompt"


def parse_xml_tree(xml: str) -> Dict[str, Any]:
    """
    将 XML 文本解析为中间树

    Args:
        xml: OnePrompt 格式的 XML 文本

    Returns:
        中间树字典

    Raises:
        MarkupError: XML 格式错误
    """
    body = _PROLOG_PATTERN.sub("", xml, count=1)

    templates: List[str] = []
    parts: List[Dict[str, Any]] = []

    def take_raw_node(match):
        tag, attrs, raw = match.group(1), match.group(2) or "", match.group(3)
        if tag is None:
            return ""
        if tag == "template":
            templates.append(raw or "")
        else:
            item = _parse_attributes("part", attrs)
            if raw:
                item["#text"] = raw
            parts.append(item)
        return ""

    rest = _RAW_NODE_PATTERN.sub(take_raw_node, body)

    if len(templates) > 1:
        raise MarkupError("Multiple <template> elements found")

    try:
        root = ET.fromstring(f"<{_ROOT_TAG}>{rest}</{_ROOT_TAG}>")
    except ET.ParseError as e:
        raise MarkupError(f"Malformed XML: {e}") from e

    tree: Dict[str, Any] = {}

    metadata_el = root.find("metadata")
    if metadata_el is not None:
        tree["metadata"] = {child.tag: child.text or "" for child in metadata_el}

    # ElementTree 不区分 <var></var> 与 <var/>，按文档顺序从原文中取自闭合标记
    self_closing = {
        id(var_el): match.group(1) == "/"
        for var_el, match in zip(root.iter("var"), _VAR_TAG_PATTERN.finditer(rest))
    }

    variables_el = root.find("variables")
    if variables_el is not None:
        items = []
        for var_el in variables_el.findall("var"):
            item = {f"@{key}": value for key, value in var_el.attrib.items()}
            if var_el.text is not None:
                item["#text"] = var_el.text
            elif not self_closing.get(id(var_el), True):
                # <var ...></var>：显式的空默认值
                item["#text"] = ""
            items.append(item)
        tree["variables"] = {"var": items}

    if parts:
        tree["part"] = parts
    if templates:
        tree["template"] = templates[0]

    logger.debug(
        f"XML解析完成: 变量 {len(tree.get('variables', {}).get('var', []))} 个, "
        f"片段 {len(parts)} 个"
    )
    return tree


def _parse_attributes(tag: str, attrs: str) -> Dict[str, Any]:
    try:
        element = ET.fromstring(f"<{tag}{attrs}/>")
    except ET.ParseError as e:
        raise MarkupError(f"Malformed <{tag}> attributes: {e}") from e
    return {f"@{key}": value for key, value in element.attrib.items()}


def _as_list(value: Any) -> List[Any]:
    """将"单个或多个"字段规整为列表"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def _attribute(item: Any, name: str) -> Optional[str]:
    if not isinstance(item, dict):
        return None
    return item.get(f"@{name}", item.get(name))


def normalize_tree(tree: Dict[str, Any]) -> Dict[str, Any]:
    """
    规整中间树

    Args:
        tree: 中间树（单值/列表混合）

    Returns:
        "variables.var" 与 "part" 均为列表的中间树
    """
    variables = tree.get("variables") or {}
    if not isinstance(variables, dict):
        raise MarkupError("<variables> must contain <var> elements")

    return {
        "metadata": dict(tree.get("metadata") or {}),
        "variables": {"var": _as_list(variables.get("var"))},
        "part": _as_list(tree.get("part")),
        "template": tree.get("template"),
    }


def tree_to_prompt(tree: Dict[str, Any]) -> Prompt:
    """
    由中间树构建 Prompt

    Args:
        tree: 中间树

    Returns:
        Prompt 对象

    Raises:
        MarkupError: 缺少必要的元素或属性
    """
    tree = normalize_tree(tree)

    if tree["template"] is None:
        raise MarkupError("Missing <template> element")

    variables = []
    for item in tree["variables"]["var"]:
        name = _attribute(item, "name")
        if not name:
            raise MarkupError("<var> element is missing the name attribute")
        required = _attribute(item, "required") in ("true", True)
        default = item.get("#text") if isinstance(item, dict) else None
        if required:
            # 必填变量不带默认值
            if default:
                logger.warning(f"必填变量 '{name}' 的默认值将被忽略")
            default = None
        variables.append(PromptVariable(name=name, required=required, default=default))

    parts = []
    for item in tree["part"]:
        name = _attribute(item, "name")
        if not name:
            raise MarkupError("<part> element is missing the name attribute")
        content = item.get("#text") if isinstance(item, dict) else None
        parts.append(PromptPart(name=name, content=content or ""))

    metadata = {key: "" if value is None else str(value) for key, value in tree["metadata"].items()}

    return Prompt(
        metadata=metadata,
        variables=variables,
        template=str(tree["template"]),
        parts=parts,
    )


def prompt_to_tree(prompt: Prompt) -> Dict[str, Any]:
    """将 Prompt 转换为中间树"""
    var_items = []
    for variable in prompt.variables:
        item = {"@name": variable.name, "@required": str(variable.required).lower()}
        if variable.default is not None:
            item["#text"] = variable.default
        var_items.append(item)

    return {
        "metadata": dict(prompt.metadata),
        "variables": {"var": var_items},
        "part": [{"@name": part.name, "#text": part.content} for part in prompt.parts],
        "template": prompt.template,
    }


def build_xml(tree: Dict[str, Any], indent: str = "  ") -> str:
    """
    将中间树序列化为 XML 文本

    template 与 part 的内容原样写出，不做实体转义。

    Args:
        tree: 中间树
        indent: 缩进字符串

    Returns:
        XML 文本（带 XML 声明）

    Raises:
        MarkupError: 元数据键不是合法标签名，或原样内容中含有结束标签
    """
    tree = normalize_tree(tree)
    blocks = [XML_PROLOG]

    metadata_el = ET.Element("metadata")
    for key, value in tree["metadata"].items():
        if not _TAG_NAME_PATTERN.match(str(key)):
            raise MarkupError(f'Metadata key "{key}" is not a valid XML tag name')
        ET.SubElement(metadata_el, str(key)).text = "" if value is None else str(value)
    blocks.append(_element_to_string(metadata_el, indent))

    variables_el = ET.Element("variables")
    for item in tree["variables"]["var"]:
        var_el = ET.SubElement(variables_el, "var")
        var_el.set("name", _attribute(item, "name") or "")
        var_el.set("required", str(_attribute(item, "required")).lower())
        if item.get("#text") is not None:
            var_el.text = item["#text"]
    # 写成 <var ...></var>，使空字符串默认值在解析时可与"无默认值"区分
    blocks.append(_element_to_string(variables_el, indent, short_empty_elements=False))

    for item in tree["part"]:
        content = item.get("#text") or ""
        _check_raw_content("part", content)
        start = ET.tostring(
            ET.Element("part", {"name": _attribute(item, "name") or ""}),
            encoding="unicode",
        )
        # <part name="x" /> -> <part name="x">
        blocks.append(f"{start[:-3]}>{content}</part>")

    template = tree["template"] or ""
    _check_raw_content("template", template)
    blocks.append(f"<template>{template}</template>")

    return "\n".join(blocks) + "\n"


def _element_to_string(element: ET.Element, indent: str, short_empty_elements: bool = True) -> str:
    ET.indent(element, space=indent)
    return ET.tostring(element, encoding="unicode", short_empty_elements=short_empty_elements)


def _check_raw_content(tag: str, content: str) -> None:
    if re.search(rf'</{tag}\s*>', content):
        raise MarkupError(f"<{tag}> content must not contain a closing </{tag}> tag")
