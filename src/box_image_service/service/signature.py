"""
Classification signature resolution.

Extracts the "input" and "scores" tensor names from model metadata. Runs
once per service construction; the result (or the failure) is reused for
every request.
"""

from box_image_service.models.enums import SignatureKind
from box_image_service.models.signature import ModelMetadata, Signature
from box_image_service.service.exceptions import SignatureResolutionError

INPUT_ROLE = "input"
SCORES_ROLE = "scores"


def resolve_classification_signature(
    metadata: ModelMetadata, signature_key: str = "default"
) -> Signature:
    """
    Resolve the classification signature registered under ``signature_key``.

    Args:
        metadata: Metadata reported by the inference backend
        signature_key: Key of the signature to serve

    Returns:
        Resolved Signature

    Raises:
        SignatureResolutionError: No usable classification signature. The
            message names what is missing.
    """
    if not metadata.signatures:
        raise SignatureResolutionError(
            f"model metadata for {metadata.name} declares no signatures",
            signature_key=signature_key,
        )

    signature_def = metadata.signatures.get(signature_key)
    if signature_def is None:
        available = ", ".join(sorted(metadata.signatures))
        raise SignatureResolutionError(
            f"no signature named {signature_key!r} in model {metadata.name} "
            f"(available: {available})",
            signature_key=signature_key,
        )

    if signature_def.kind != SignatureKind.CLASSIFICATION:
        raise SignatureResolutionError(
            f"expected a classification signature, got {signature_def.kind.value}",
            signature_key=signature_key,
        )

    input_tensor = signature_def.inputs.get(INPUT_ROLE)
    if not input_tensor:
        raise SignatureResolutionError(
            f"classification signature {signature_key!r} has no {INPUT_ROLE!r} tensor",
            signature_key=signature_key,
        )
    scores_tensor = signature_def.outputs.get(SCORES_ROLE)
    if not scores_tensor:
        raise SignatureResolutionError(
            f"classification signature {signature_key!r} has no {SCORES_ROLE!r} tensor",
            signature_key=signature_key,
        )

    # Only checked when the backend declares its tensors
    declared_inputs = {spec.name for spec in metadata.inputs}
    if declared_inputs and input_tensor not in declared_inputs:
        raise SignatureResolutionError(
            f"signature input tensor {input_tensor!r} is not a model input",
            signature_key=signature_key,
        )
    declared_outputs = {spec.name for spec in metadata.outputs}
    if declared_outputs and scores_tensor not in declared_outputs:
        raise SignatureResolutionError(
            f"signature scores tensor {scores_tensor!r} is not a model output",
            signature_key=signature_key,
        )

    return Signature(input_tensor=input_tensor, scores_tensor=scores_tensor)
