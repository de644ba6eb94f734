"""Adapter turning python-hcl2 output into a tree of named blocks.

``hcl2.loads`` returns nested dicts in which labelled blocks are keyed by
their labels. The extractor only needs "a block has a name, a scalar value
and children", so this module folds that shape into ``HclBlock`` nodes:

    provider "registry.terraform.io/hashicorp/azurerm" { version = "3.0.0" }

becomes ``HclBlock("provider", "registry.terraform.io/hashicorp/azurerm",
children=(HclBlock("version", "3.0.0"),))``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import hcl2

from common.errors import HclParseError


@dataclass(frozen=True)
class HclBlock:
    """A named node: a block (value = first label) or an attribute (value = scalar)."""
    name: str
    value: str = ""
    children: Tuple["HclBlock", ...] = ()

    def find(self, name: str) -> Iterator["HclBlock"]:
        """Yield direct children called ``name``."""
        return (child for child in self.children if child.name == name)

    def first(self, name: str) -> Optional["HclBlock"]:
        return next(self.find(name), None)


def _unquote(text: str) -> str:
    # Newer hcl2 releases keep the source quotes on labels and strings.
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


def _is_meta(key: str) -> bool:
    return key.startswith("__") and key.endswith("__")


def _scalar(value: Any) -> str:
    if isinstance(value, str):
        return _unquote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None or isinstance(value, (list, dict)):
        return ""
    return str(value)


def _body_keys(body: Dict[str, Any]) -> List[str]:
    return [k for k in body if not _is_meta(k)]


def _block(name: str, body: Any) -> HclBlock:
    """Fold one block body, peeling a label when the body is keyed by one."""
    if not isinstance(body, dict):
        return HclBlock(name=name, value=_scalar(body))
    keys = _body_keys(body)
    if len(keys) == 1 and isinstance(body[keys[0]], dict):
        label = keys[0]
        return HclBlock(name=name, value=_unquote(label), children=_children(body[label]))
    return HclBlock(name=name, children=_children(body))


def _children(body: Dict[str, Any]) -> Tuple[HclBlock, ...]:
    nodes: List[HclBlock] = []
    for key in _body_keys(body):
        value = body[key]
        name = _unquote(key)
        if isinstance(value, list) and value and all(isinstance(v, dict) for v in value):
            nodes.extend(_block(name, v) for v in value)
        elif isinstance(value, dict):
            nodes.append(_block(name, value))
        else:
            nodes.append(HclBlock(name=name, value=_scalar(value)))
    return tuple(nodes)


def parse_hcl(text: str) -> HclBlock:
    """Parse HCL ``text`` into a root block whose children are the top-level blocks.

    Raises:
        HclParseError: If the text is not valid HCL.
    """
    try:
        document = hcl2.loads(text)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        # lark raises several unrelated exception types for syntax errors
        message = str(exc).strip() or repr(exc)
        raise HclParseError(message.splitlines()[0]) from exc
    if not isinstance(document, dict):
        raise HclParseError("HCL document did not produce a mapping")
    return HclBlock(name="", children=_children(document))
