"""Turn service XML responses into plain dicts and lists."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any
from xml.etree import ElementTree


def _local_name(tag: str) -> str:
    # "{http://queue.amazonaws.com/doc/2007-05-01/}QueueUrl" -> "QueueUrl"
    return tag.rsplit("}", 1)[-1]


def _convert(element: ElementTree.Element, force_array: Collection[str]) -> Any:
    children = list(element)
    attributes = {_local_name(k): v for k, v in element.attrib.items()}
    text = (element.text or "").strip()

    if not children and not attributes:
        return text

    data: dict[str, Any] = dict(attributes)
    for child in children:
        name = _local_name(child.tag)
        value = _convert(child, force_array)
        if name in data:
            if not isinstance(data[name], list):
                data[name] = [data[name]]
            data[name].append(value)
        elif name in force_array:
            data[name] = [value]
        else:
            data[name] = value
    if text:
        data["content"] = text
    return data


def parse(content: str | bytes, force_array: Collection[str] = ()) -> dict[str, Any]:
    """Deserialize an XML document into a dict keyed by child element name.

    The root element itself is dropped. Repeated elements become lists;
    elements named in force_array are lists even when they occur once.
    Elements with only text become strings, attributes become keys.

    Raises:
        ElementTree.ParseError: the content is not well-formed XML
    """
    root = ElementTree.fromstring(content)
    data = _convert(root, force_array)
    if isinstance(data, dict):
        return data
    return {"content": data} if data else {}


def find_error_message(content: str | bytes) -> str | None:
    """Return the Message of the first Error element, if any can be found."""
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError:
        return None
    for element in root.iter():
        if _local_name(element.tag) != "Error":
            continue
        for child in element:
            if _local_name(child.tag) == "Message" and child.text:
                return child.text.strip()
    return None
