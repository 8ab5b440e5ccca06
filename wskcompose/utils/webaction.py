"""
Web-export annotation shaping.

An action is reachable over plain HTTP when it carries the web-export
annotation triple. Every transform first strips the three keys and then
re-adds them with the values for the requested mode:

    mode        web-export  raw-http  final
    yes/true    true        false     true
    no/false    false       false     false
    raw         true        true      true
"""

from __future__ import annotations

from wskcompose.errors import WebModeError
from wskcompose.whisk.entities import KeyValue, add_key_value, delete_key

WEB_EXPORT_ANNOTATION = "web-export"
RAW_HTTP_ANNOTATION = "raw-http"
FINAL_ANNOTATION = "final"

WEB_ANNOTATION_KEYS = (WEB_EXPORT_ANNOTATION, RAW_HTTP_ANNOTATION, FINAL_ANNOTATION)

# mode -> (web-export, raw-http, final)
WEB_MODES: dict[str, tuple[bool, bool, bool]] = {
    "yes": (True, False, True),
    "true": (True, False, True),
    "no": (False, False, False),
    "false": (False, False, False),
    "raw": (True, True, True),
}


def delete_web_annotation_keys(annotations: list[KeyValue]) -> list[KeyValue]:
    for key in WEB_ANNOTATION_KEYS:
        annotations = delete_key(key, annotations)
    return annotations


def _apply_mode(annotations: list[KeyValue], values: tuple[bool, bool, bool]) -> list[KeyValue]:
    annotations = delete_web_annotation_keys(annotations)
    for key, value in zip(WEB_ANNOTATION_KEYS, values):
        annotations = add_key_value(key, value, annotations)
    return annotations


def web_action(
    mode: str,
    annotations: list[KeyValue] | None,
    fetch: bool,
) -> list[KeyValue] | None:
    """
    Reshape annotations for a web-export mode.

    Args:
        mode: yes/true, no/false or raw (case-insensitive)
        annotations: Existing annotations, or None when none were fetched
        fetch: True when annotations came from the platform; a None list is
            then left untouched

    Returns:
        The new annotation list (a copy), or None when nothing was applied
        to a None list

    Raises:
        WebModeError: If mode is not recognized
    """
    values = WEB_MODES.get(mode.lower())
    if values is None:
        raise WebModeError(mode)

    if annotations is not None or not fetch:
        return _apply_mode(annotations or [], values)
    return annotations
