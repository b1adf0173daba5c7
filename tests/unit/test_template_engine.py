"""
模板引擎测试：变量提取与占位符替换
"""

from oneprompt.prompts.template_engine import (
    extract_template_variables,
    substitute_template_variables,
)


class TestExtractTemplateVariables:
    """变量提取测试"""

    def test_extracts_in_order(self):
        """按出现顺序提取"""
        assert extract_template_variables("Hello {{name}}, age: {{age}}") == ["name", "age"]

    def test_keeps_duplicates(self):
        """重复引用保留重复项"""
        template = "{{x}} and {{y}} and {{x}} again {{x}}"
        assert extract_template_variables(template) == ["x", "y", "x", "x"]

    def test_trims_whitespace(self):
        """去除花括号内空白"""
        assert extract_template_variables("{{ name }} {{\tage\n}}") == ["name", "age"]

    def test_no_matches(self):
        """无占位符时返回空列表"""
        assert extract_template_variables("plain text { not } a {var}") == []
        assert extract_template_variables("") == []

    def test_closes_at_first_braces(self):
        """在第一个 }} 处闭合"""
        assert extract_template_variables("{{a}}}} {{b}}") == ["a", "b"]

    def test_inner_brace_not_allowed(self):
        """内部含 } 的不算占位符"""
        assert extract_template_variables("{{a}b}}") == []

    def test_nested_open_braces(self):
        """不支持嵌套，左花括号作为名称的一部分"""
        assert extract_template_variables("{{{x}}}") == ["{x"]


class TestSubstituteTemplateVariables:
    """占位符替换测试"""

    def test_basic_substitution(self):
        """基本替换"""
        result = substitute_template_variables("Hello {{name}}!", {"name": "Alice"})
        assert result == "Hello Alice!"

    def test_whitespace_inside_braces(self):
        """花括号内空白不影响查找"""
        result = substitute_template_variables("Hi {{ name }}", {"name": "Bob"})
        assert result == "Hi Bob"

    def test_missing_value_keeps_token(self):
        """缺失变量保留原占位符"""
        result = substitute_template_variables("Hi {{ who }}!", {})
        assert result == "Hi {{ who }}!"

    def test_empty_value_keeps_token(self):
        """空字符串同样保留原占位符"""
        assert substitute_template_variables("Hi {{n}}!", {"n": ""}) == "Hi {{n}}!"

    def test_value_not_rescanned(self):
        """替换值中的占位符不会再次替换"""
        result = substitute_template_variables("{{a}}", {"a": "{{b}}", "b": "x"})
        assert result == "{{b}}"

    def test_repeated_tokens(self):
        """重复占位符全部替换"""
        result = substitute_template_variables("{{x}}-{{x}}-{{y}}", {"x": "1"})
        assert result == "1-1-{{y}}"
