"""Image annotation post-processing."""

from typing import Any

AnnotationSummary = dict[str, Any]

# Fields that are large or irrelevant for prompting
_DROPPED_FIELDS = ("cropHintsAnnotation", "fullTextAnnotation")
_GEOMETRY_FIELD = "boundingPoly"


def trim_annotation(response: dict[str, Any]) -> AnnotationSummary:
    """Reduce a raw image annotation response to a prompt-sized summary.

    Drops crop hints and full-page text, removes geometry from every label
    and text detection, and keeps only the first text detection (the OCR
    result for the whole image).

    Args:
        response: Annotation response as a dict with lowerCamelCase keys.

    Returns:
        Trimmed copy of the response. The input is not modified.
    """
    summary = {
        key: value for key, value in response.items() if key not in _DROPPED_FIELDS
    }

    if "labelAnnotations" in summary:
        summary["labelAnnotations"] = [
            _without_geometry(label) for label in summary["labelAnnotations"] or []
        ]

    text_annotations = summary.pop("textAnnotations", None)
    if text_annotations:
        summary["textAnnotations"] = _without_geometry(text_annotations[0])

    return summary


def _without_geometry(annotation: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in annotation.items() if key != _GEOMETRY_FIELD}
