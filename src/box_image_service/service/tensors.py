"""Tensor marshaling helpers for the classification service."""

from typing import Sequence

import numpy as np

from box_image_service.models.shape import ModelShape


def build_input_tensor(image_data: Sequence[float], shape: ModelShape) -> np.ndarray:
    """
    Pack request samples into a float32 tensor of shape [1, image_data_size].

    Samples are copied in order (row-major, batch of one). The caller has
    already checked the length.
    """
    return np.asarray(image_data, dtype=np.float32).reshape(shape.input_shape)


def describe_shape(shape: Sequence[int]) -> str:
    """Human-readable shape, e.g. ``[1,4]``."""
    return "[" + ",".join(str(dim) for dim in shape) + "]"
