"""Rendering of inference payloads.

The Inference API does not guarantee a response shape; it varies by model
family. `classify_payload` turns the decoded JSON into an explicit
`PayloadShape` and `format_payload` renders each arm. Unknown shapes degrade
to an indented JSON dump; nothing here raises on JSON-decoded input.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from core.domain.models import (
    LabeledScore,
    LabeledScoreList,
    OpaquePayload,
    PayloadShape,
    SingleObject,
)

LABEL_PREFIX = "LABEL_"


def _as_labeled_score(item: Any) -> LabeledScore | None:
    if not isinstance(item, dict):
        return None
    label = item.get("label")
    score = item.get("score")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(label, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    try:
        return LabeledScore(label=label, score=float(score))
    except (ValidationError, OverflowError):
        return None


def _as_labeled_scores(value: Any) -> list[LabeledScore] | None:
    if not isinstance(value, list) or not value:
        return None
    scores: list[LabeledScore] = []
    for item in value:
        parsed = _as_labeled_score(item)
        if parsed is None:
            return None
        scores.append(parsed)
    return scores


def classify_payload(payload: Any) -> PayloadShape:
    if isinstance(payload, list) and payload:
        scores = _as_labeled_scores(payload[0])
        if scores is not None:
            return LabeledScoreList(scores=tuple(scores))
        return SingleObject(value=payload[0])
    return OpaquePayload(value=payload)


def clean_label(label: str) -> str:
    """`LABEL_POSITIVE` -> `POSITIVE`, `very_positive` -> `very positive`."""

    return label.removeprefix(LABEL_PREFIX).replace("_", " ").strip()


def format_percentage(score: float) -> str:
    return f"{score * 100:.2f}%"


def to_pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def format_shape(shape: PayloadShape) -> str:
    if isinstance(shape, LabeledScoreList):
        return "\n".join(
            f" - {clean_label(item.label)}: {format_percentage(item.score)}" for item in shape.scores
        )
    if isinstance(shape, SingleObject):
        return f" - Result: {to_pretty_json(shape.value)}"
    return f" - Raw response: {to_pretty_json(shape.value)}"


def format_payload(payload: Any) -> str:
    """Render a payload as human-readable lines."""

    return format_shape(classify_payload(payload))
