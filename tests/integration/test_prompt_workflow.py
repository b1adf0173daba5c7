"""
集成测试：解析 -> 序列化 -> 再解析 -> 渲染 完整流程
"""

from oneprompt import parse_from_xml, convert_to_xml, render_with_variables


PROMPT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <title>My Prompt Title</title>
  <description>Optional description here</description>
</metadata>

<variables>
  <var name="name" required="true" />
  <var name="age" required="false">25</var>
  <var name="greeting" required="false">Hello</var>
  <var name="style" required="false">plain</var>
</variables>

<part name="code_block">```python
# This is code with syntax highlighting
def hello():
    print("Hello World")
```</part>
<part name="no_code">(no code sample)</part>

<template>
# {{greeting}} {{ name }}!

I see you are {{age}} years old.

<html> tags inside template are not processed.

<oneprompt:if var="style" equals="code" show="code_block" else="no_code" />
</template>
"""


class TestPromptWorkflow:
    """完整流程测试"""

    def test_round_trip_is_lossless(self):
        """XML 往返不丢失信息"""
        prompt = parse_from_xml(PROMPT_XML)
        again = parse_from_xml(convert_to_xml(prompt))

        assert again == prompt
        assert again.title == "My Prompt Title"
        assert again.metadata["description"] == "Optional description here"
        assert again.variable_names == ["name", "age", "greeting", "style"]
        assert again.part_names == ["code_block", "no_code"]
        assert again.template == prompt.template

    def test_serialization_is_stable(self):
        """二次序列化结果一致"""
        first = convert_to_xml(parse_from_xml(PROMPT_XML))
        assert convert_to_xml(parse_from_xml(first)) == first

    def test_render_defaults(self):
        """使用默认值渲染"""
        rendered = render_with_variables(PROMPT_XML, {"name": "Alice"})

        assert rendered.startswith("# Hello Alice!")
        assert "I see you are 25 years old." in rendered
        assert "<html> tags inside template are not processed." in rendered
        assert rendered.endswith("(no code sample)")

    def test_render_selected_part(self):
        """条件选择代码片段"""
        prompt = parse_from_xml(PROMPT_XML)
        rendered = render_with_variables(prompt, {"name": "Bob", "style": "code", "age": "40"})

        assert "I see you are 40 years old." in rendered
        assert 'print("Hello World")' in rendered
        assert "(no code sample)" not in rendered

    def test_render_is_repeatable(self):
        """同一文档可重复渲染"""
        prompt = parse_from_xml(PROMPT_XML)
        inputs = {"name": "Carol"}
        assert render_with_variables(prompt, inputs) == render_with_variables(prompt, inputs)
