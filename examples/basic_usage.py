"""
oneprompt 基本用法示例

展示如何解析、验证、渲染和序列化提示词文档。
"""

from oneprompt import (
    OnePromptError,
    Prompt,
    PromptVariable,
    PromptPart,
    parse_from_xml,
    convert_to_xml,
    render_with_variables,
)


PROMPT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <title>Code Review</title>
  <description>Ask for a review of a code snippet</description>
</metadata>
<variables>
  <var name="language" required="true" />
  <var name="strict" required="false">no</var>
</variables>
<part name="strict_rules">Be strict: flag every style issue.</part>
<part name="relaxed_rules">Focus on correctness only.</part>
<template>
Please review the following {{language}} code.
<oneprompt:if var="strict" equals="yes" show="strict_rules" else="relaxed_rules" />
</template>
"""


def basic_usage_example():
    """基本用法示例"""
    print("=" * 60)
    print("oneprompt 基本用法示例")
    print("=" * 60)

    # 1. 从XML解析
    print("\n1. 解析XML...")
    prompt = parse_from_xml(PROMPT_XML)
    print(f"   标题: {prompt.title}")
    print(f"   变量: {prompt.variable_names}")
    print(f"   片段: {prompt.part_names}")

    # 2. 渲染
    print("\n2. 渲染...")
    print(render_with_variables(prompt, {"language": "Python"}))
    print(render_with_variables(prompt, {"language": "Go", "strict": "yes"}))

    # 3. 直接构建文档并序列化
    print("\n3. 构建文档并序列化...")
    greeting = Prompt(
        metadata={"title": "Greeting"},
        variables=[
            PromptVariable(name="name", required=True),
            PromptVariable(name="greeting", required=False, default="Hello"),
        ],
        template="{{greeting}} {{name}}!",
        parts=[PromptPart(name="unused", content="")],
    )
    print(convert_to_xml(greeting))

    # 4. 错误处理
    print("4. 错误处理...")
    try:
        render_with_variables(greeting, {})
    except OnePromptError as e:
        print(f"   {e}")


if __name__ == "__main__":
    basic_usage_example()
