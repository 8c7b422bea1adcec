"""Modality string helpers."""
from typing import List, Tuple

from llm_compass.providers.models import Model


def parse_modality(modality: str) -> Tuple[List[str], List[str]]:
    """Split a '<inputs>-><outputs>' string into lower-cased modality lists.

    A string without exactly one '->' separator, or an empty side, is read as
    text.

    >>> parse_modality("text+image->text")
    (['text', 'image'], ['text'])
    >>> parse_modality("text")
    (['text'], ['text'])
    """
    text = (modality or "").strip().lower()
    if text.count("->") != 1:
        return ["text"], ["text"]

    input_str, output_str = text.split("->")
    inputs = [part.strip() for part in input_str.split("+") if part.strip()]
    outputs = [part.strip() for part in output_str.split("+") if part.strip()]
    return inputs or ["text"], outputs or ["text"]


def model_modalities(model: Model) -> Tuple[List[str], List[str]]:
    """Parsed input and output modalities of a catalog model."""
    return parse_modality(model.architecture.modality)
