"""XML helpers for asserting on generated project files."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import List

MSBUILD_NS = {"msb": "http://schemas.microsoft.com/developer/msbuild/2003"}


def parse(text: str) -> ET.Element:
    return ET.fromstring(text.encode("utf-8"))


def include_values(root: ET.Element, item: str) -> List[str]:
    return [node.attrib["Include"] for node in root.findall(f"msb:ItemGroup/msb:{item}", MSBUILD_NS)]


def property_values(root: ET.Element, name: str) -> List[str]:
    return [node.text or "" for node in root.findall(f"msb:PropertyGroup/msb:{name}", MSBUILD_NS)]


def first_property(root: ET.Element, name: str) -> str:
    values = property_values(root, name)
    assert values, f"missing <{name}>"
    return values[0]
