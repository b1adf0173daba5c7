"""
变量解析测试
"""

import pytest

from oneprompt.prompts.errors import MissingRequiredVariableError
from oneprompt.prompts.models import PromptVariable
from oneprompt.prompts.variables import resolve_variables


class TestResolveVariables:
    """变量解析测试"""

    def setup_method(self):
        """测试设置"""
        self.declared = [
            PromptVariable(name="name", required=True),
            PromptVariable(name="greeting", required=False, default="Hello"),
            PromptVariable(name="age", required=False, default="25"),
        ]

    def test_defaults_applied(self):
        """可选变量缺失时使用默认值"""
        resolved = resolve_variables(self.declared, {"name": "Alice"})
        assert resolved == {"name": "Alice", "greeting": "Hello", "age": "25"}

    def test_input_overrides_default(self):
        """输入值优先于默认值"""
        resolved = resolve_variables(self.declared, {"name": "Alice", "greeting": "Hi"})
        assert resolved["greeting"] == "Hi"

    def test_empty_string_is_explicit_value(self):
        """空字符串是有效的显式取值"""
        resolved = resolve_variables(self.declared, {"name": "", "greeting": ""})
        assert resolved["name"] == ""
        assert resolved["greeting"] == ""

    def test_missing_required_fails(self):
        """缺少必填变量时报错并给出变量名"""
        with pytest.raises(MissingRequiredVariableError) as exc_info:
            resolve_variables(self.declared, {"greeting": "Hi"})
        assert exc_info.value.name == "name"
        assert "Missing required variable: name" in str(exc_info.value)

    def test_fails_on_first_missing_in_declaration_order(self):
        """按声明顺序报告第一个缺失的必填变量"""
        declared = [
            PromptVariable(name="b", required=True),
            PromptVariable(name="a", required=True),
        ]
        with pytest.raises(MissingRequiredVariableError) as exc_info:
            resolve_variables(declared, {})
        assert exc_info.value.name == "b"

    def test_extra_inputs_ignored(self):
        """未声明的输入键被忽略"""
        resolved = resolve_variables(self.declared, {"name": "A", "unknown": "x"})
        assert set(resolved) == {"name", "greeting", "age"}

    def test_idempotent(self):
        """相同输入得到相同结果，且不修改输入"""
        inputs = {"name": "Alice"}
        first = resolve_variables(self.declared, inputs)
        second = resolve_variables(self.declared, inputs)
        assert first == second
        assert inputs == {"name": "Alice"}

    def test_no_declared_variables(self):
        """没有声明变量时返回空字典"""
        assert resolve_variables([], {"x": "1"}) == {}
