"""
Trigger Composer.

A trigger fed by a provider carries the feed as a reserved `feed`
annotation. `source` is the deprecated name of `feed`.
"""

from __future__ import annotations

import logging

from wskcompose.config.platform import FEED_ANNOTATION
from wskcompose.parsers.parameters import resolve_annotations, resolve_parameters
from wskcompose.schemas.manifest import PackageSpec
from wskcompose.utils.env import convert_single_name
from wskcompose.whisk.entities import KeyValue, Trigger

logger = logging.getLogger(__name__)


def compose_triggers(
    file_path: str,
    pkg: PackageSpec,
    *,
    managed_annotation: KeyValue | None = None,
) -> list[Trigger]:
    triggers = []
    for spec in pkg.get_trigger_list():
        trigger = Trigger(name=convert_single_name(spec.name), namespace=spec.namespace)

        feed = spec.feed
        if spec.source:
            logger.warning(
                f"[triggers] Key [source] of trigger [{spec.name}] in manifest is deprecated, "
                f"use [{FEED_ANNOTATION}] instead"
            )
            if not feed:
                feed = spec.source

        if feed:
            trigger.annotations.append(KeyValue(key=FEED_ANNOTATION, value=feed))

        trigger.parameters = resolve_parameters(spec.inputs, file_path)
        trigger.annotations.extend(resolve_annotations(spec.annotations))
        if managed_annotation is not None:
            trigger.annotations.append(managed_annotation.model_copy(deep=True))

        triggers.append(trigger)
    return triggers
