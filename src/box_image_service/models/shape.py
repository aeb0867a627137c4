"""Model dimension context passed to the classification service."""

from pydantic import BaseModel, ConfigDict, Field

from box_image_service.config import Settings


class ModelShape(BaseModel):
    """
    Dimensions of the served model.

    The reference deployment classifies 150x150 grayscale images into
    4 labels, but nothing in the service depends on those numbers.
    """
    model_config = ConfigDict(frozen=True)

    image_size: int = Field(..., ge=1, description="Pixels per image side (square images)")
    num_channels: int = Field(..., ge=1, description="Channels per pixel")
    num_labels: int = Field(..., ge=1, description="Number of class scores produced")

    @property
    def image_data_size(self) -> int:
        """Number of samples in one flattened image."""
        return self.image_size * self.image_size * self.num_channels

    @property
    def input_shape(self) -> tuple[int, int]:
        """Shape of the input tensor sent to the backend (batch of one)."""
        return (1, self.image_data_size)

    @property
    def output_shape(self) -> tuple[int, int]:
        """Shape the backend must return for the scores tensor."""
        return (1, self.num_labels)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelShape":
        return cls(
            image_size=settings.IMAGE_SIZE,
            num_channels=settings.NUM_CHANNELS,
            num_labels=settings.NUM_LABELS,
        )
