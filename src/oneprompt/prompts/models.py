"""
提示词数据模型

Prompt 由元数据、变量声明、可复用片段（part）和模板正文组成。
所有模型均为不可变数据类，校验与渲染过程不会修改它们。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, Optional, List, Mapping, Iterable


@dataclass(frozen=True)
class PromptVariable:
    """模板变量声明"""
    name: str
    required: bool = True
    default: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        data: Dict[str, Any] = {"name": self.name, "required": self.required}
        if self.default is not None:
            data["default"] = self.default
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptVariable":
        """从字典创建"""
        return cls(
            name=data["name"],
            required=data.get("required", True) in ("true", True),
            default=data.get("default"),
        )


@dataclass(frozen=True)
class PromptPart:
    """命名内容片段，由条件指令按名称引用"""
    name: str
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {"name": self.name, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptPart":
        """从字典创建"""
        return cls(name=data["name"], content=data.get("content") or "")


@dataclass(frozen=True)
class Prompt:
    """
    完整的提示词文档

    Attributes:
        metadata: 元数据（有序，必须包含 title）
        variables: 变量声明
        template: 模板正文
        parts: 命名内容片段
    """
    metadata: Mapping[str, str]
    variables: tuple = ()
    template: str = ""
    parts: tuple = ()

    def __post_init__(self):
        # 冻结容器，保证渲染期间文档只读
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        object.__setattr__(self, "variables", tuple(self.variables))
        object.__setattr__(self, "parts", tuple(self.parts))

    def __hash__(self):
        return hash((tuple(self.metadata.items()), self.variables, self.template, self.parts))

    @property
    def title(self) -> str:
        return self.metadata.get("title", "")

    @property
    def variable_names(self) -> List[str]:
        return [v.name for v in self.variables]

    @property
    def part_names(self) -> List[str]:
        return [p.name for p in self.parts]

    def get_variable(self, name: str) -> Optional[PromptVariable]:
        """按名称查找变量声明"""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None

    def get_part(self, name: str) -> Optional[PromptPart]:
        """按名称查找片段"""
        for part in self.parts:
            if part.name == name:
                return part
        return None

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "metadata": dict(self.metadata),
            "variables": [v.to_dict() for v in self.variables],
            "parts": [p.to_dict() for p in self.parts],
            "template": self.template,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prompt":
        """从字典创建"""
        return cls(
            metadata=data.get("metadata") or {},
            variables=_build_all(PromptVariable, data.get("variables")),
            template=data.get("template") or "",
            parts=_build_all(PromptPart, data.get("parts")),
        )


def _build_all(model, items: Optional[Iterable[Any]]) -> List[Any]:
    return [
        item if isinstance(item, model) else model.from_dict(item)
        for item in (items or [])
    ]


# 渲染时的输入值 / 解析后的完整取值
PromptInputVariables = Dict[str, str]
ResolvedVariables = Dict[str, str]
