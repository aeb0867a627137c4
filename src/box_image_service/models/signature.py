"""
Model metadata and signature models.

ModelMetadata is what the inference backend reports about a loaded model.
SignatureDef entries are the named signatures declared in that metadata;
Signature is the resolved classification signature the service runs with.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from box_image_service.models.enums import SignatureKind


class TensorSpec(BaseModel):
    """Declared name, datatype and shape of a model input or output."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Backend tensor name")
    datatype: str = Field(default="FP32", description="Element type (KServe v2 datatype name)")
    shape: list[int] = Field(
        default_factory=list,
        description="Declared shape, -1 for variable dimensions",
    )


class SignatureDef(BaseModel):
    """
    A named signature declared by the model.

    ``inputs`` and ``outputs`` map logical roles to backend tensor names.
    A classification signature uses the "input" role and the "scores" role.
    """
    model_config = ConfigDict(frozen=True)

    kind: SignatureKind = Field(..., description="What the signature computes")
    inputs: dict[str, str] = Field(default_factory=dict, description="Role -> input tensor name")
    outputs: dict[str, str] = Field(default_factory=dict, description="Role -> output tensor name")


class ModelMetadata(BaseModel):
    """Metadata about the loaded model, as reported by the backend."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Model name")
    versions: list[str] = Field(default_factory=list, description="Available model versions")
    platform: Optional[str] = Field(default=None, description="Backend platform (e.g. onnxruntime_onnx)")
    inputs: list[TensorSpec] = Field(default_factory=list, description="Declared input tensors")
    outputs: list[TensorSpec] = Field(default_factory=list, description="Declared output tensors")
    signatures: dict[str, SignatureDef] = Field(
        default_factory=dict,
        description="Signature key -> signature definition",
    )


class Signature(BaseModel):
    """Resolved classification signature: logical roles -> backend tensor names."""
    model_config = ConfigDict(frozen=True)

    input_tensor: str = Field(..., description="Tensor name bound to the image input")
    scores_tensor: str = Field(..., description="Tensor name holding per-class scores")
