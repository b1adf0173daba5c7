import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

import dotenv
import yaml

from .config.config_manager import get_config_manager
from .prompts import (
    OnePromptError,
    parse_from_xml,
    convert_to_xml,
    render_with_variables,
    extract_template_variables,
)
from .utils.logger import setup_logger

logger = logging.getLogger("oneprompt.cli")


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _parse_var_pairs(pairs: List[str]) -> Dict[str, str]:
    values = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(f"变量格式应为 NAME=VALUE: {pair}")
        name, value = pair.split("=", 1)
        values[name.strip()] = value
    return values


def _load_vars_file(path: str) -> Dict[str, str]:
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(".json"):
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OnePromptError(f"Variables file must contain a mapping: {path}")
    return {str(k): "" if v is None else str(v) for k, v in data.items()}


def _validate(args: argparse.Namespace) -> int:
    prompt = parse_from_xml(_read_text(args.file))
    print(f"OK: {prompt.title}")
    return 0


def _render(args: argparse.Namespace) -> int:
    values: Dict[str, str] = {}
    if args.vars_file:
        values.update(_load_vars_file(args.vars_file))
    values.update(_parse_var_pairs(args.var or []))
    print(render_with_variables(_read_text(args.file), values))
    return 0


def _format(args: argparse.Namespace) -> int:
    indent = args.indent
    if indent is None:
        indent = get_config_manager().get("xml.indent", 2)
    prompt = parse_from_xml(_read_text(args.file))
    sys.stdout.write(convert_to_xml(prompt, indent=" " * int(indent)))
    return 0


def _inspect(args: argparse.Namespace) -> int:
    output_format = args.format or get_config_manager().get("cli.output_format", "json")
    data = parse_from_xml(_read_text(args.file)).to_dict()
    if output_format == "yaml":
        sys.stdout.write(yaml.safe_dump(data, allow_unicode=True, sort_keys=False))
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def _variables(args: argparse.Namespace) -> int:
    prompt = parse_from_xml(_read_text(args.file))
    used = extract_template_variables(prompt.template)
    for variable in prompt.variables:
        kind = "required" if variable.required else f"optional (default: {variable.default!r})"
        print(f"{variable.name}\t{kind}\tused {used.count(variable.name)}x")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oneprompt")
    parser.add_argument("--config", default=None, help="配置文件路径")
    parser.add_argument("--log-level", default=None)
    subparsers = parser.add_subparsers(dest="cmd")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="提示词XML文件，- 表示标准输入")

    p_validate = subparsers.add_parser("validate", parents=[common])
    p_validate.set_defaults(func=_validate)

    p_render = subparsers.add_parser("render", parents=[common])
    p_render.add_argument("--var", action="append", metavar="NAME=VALUE")
    p_render.add_argument("--vars-file", default=None)
    p_render.set_defaults(func=_render)

    p_format = subparsers.add_parser("format", parents=[common])
    p_format.add_argument("--indent", type=int, default=None)
    p_format.set_defaults(func=_format)

    p_inspect = subparsers.add_parser("inspect", parents=[common])
    p_inspect.add_argument("--format", choices=["json", "yaml"], default=None)
    p_inspect.set_defaults(func=_inspect)

    p_variables = subparsers.add_parser("variables", parents=[common])
    p_variables.set_defaults(func=_variables)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    dotenv.load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "cmd", None):
        parser.print_help()
        return 2

    get_config_manager(args.config, reload=True)
    setup_logger(level=args.log_level)
    logger.debug(f"执行命令: {args.cmd} {args.file}")

    try:
        return args.func(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except OnePromptError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"无法读取文件: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
