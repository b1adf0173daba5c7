"""
旧接口兼容层

parse / serialize / render 已更名，这里保留旧名称并发出 DeprecationWarning。
"""

import warnings
from typing import Union

from .models import Prompt, PromptInputVariables
from .prompt import parse_from_xml, convert_to_xml, render_with_variables


def _deprecated(old: str, new: str) -> None:
    warnings.warn(
        f"`{old}()` is deprecated. Use `{new}()` instead.",
        DeprecationWarning,
        stacklevel=3,
    )


def parse(xml: str) -> Prompt:
    """已废弃，请使用 parse_from_xml()"""
    _deprecated("parse", "parse_from_xml")
    return parse_from_xml(xml)


def serialize(prompt: Prompt) -> str:
    """已废弃，请使用 convert_to_xml()"""
    _deprecated("serialize", "convert_to_xml")
    return convert_to_xml(prompt)


def render(source: Union[str, Prompt], variables: PromptInputVariables) -> str:
    """已废弃，请使用 render_with_variables()"""
    _deprecated("render", "render_with_variables")
    return render_with_variables(source, variables)
