"""
Request and response messages for the Classify operation.

These are the transport-neutral shapes exchanged with callers. Both the
HTTP route and the gRPC servicer decode into ImageRequest and encode from
ScoreResponse.
"""

from pydantic import BaseModel, ConfigDict, Field


class ImageRequest(BaseModel):
    """
    A single image to classify.

    The samples are the image flattened in row-major order
    (height x width x channels). The expected length is configuration
    (see ModelShape), so it is checked by the service rather than here.
    """
    model_config = ConfigDict(frozen=True)

    image_data: list[float] = Field(
        ...,
        description="Flattened image samples (row-major, height x width x channels)",
        examples=[[0.0, 0.5, 1.0, 0.25]],
    )


class ScoreResponse(BaseModel):
    """Per-class scores in the class-index order of the model signature."""
    model_config = ConfigDict(frozen=True)

    scores: list[float] = Field(
        ...,
        description="One score per class label",
        examples=[[0.1, 0.2, 0.3, 0.4]],
    )
