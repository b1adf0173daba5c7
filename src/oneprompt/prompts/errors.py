"""
提示词错误类型

对外只暴露 OnePromptError；其余异常在内部检测点抛出，由门面统一包装。
"""


class OnePromptError(Exception):
    """OnePrompt 对外统一异常"""
    pass


class PromptValidationError(ValueError):
    """文档结构校验失败"""
    pass


class MissingRequiredVariableError(ValueError):
    """渲染时缺少必填变量"""

    def __init__(self, name: str):
        super().__init__(f"Missing required variable: {name}")
        self.name = name


class MarkupError(ValueError):
    """XML 标记解析或生成失败"""
    pass
