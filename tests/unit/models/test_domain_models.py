"""
Unit tests for domain models: status codes, messages, shape and settings.
"""

import pytest
from pydantic import ValidationError

from box_image_service.config import Settings
from box_image_service.models.enums import StatusCode
from box_image_service.models.messages import ImageRequest, ScoreResponse
from box_image_service.models.shape import ModelShape


class TestStatusCode:

    def test_lookup_member(self):
        assert StatusCode.lookup(StatusCode.NOT_FOUND) is StatusCode.NOT_FOUND

    @pytest.mark.parametrize("raw", ["UNAVAILABLE", "unavailable", "Unavailable"])
    def test_lookup_by_name(self, raw):
        assert StatusCode.lookup(raw) is StatusCode.UNAVAILABLE

    @pytest.mark.parametrize("raw", ["backend-unavailable", "", "14"])
    def test_lookup_non_canonical(self, raw):
        assert StatusCode.lookup(raw) is None

    def test_sixteen_error_codes(self):
        assert len([code for code in StatusCode if code is not StatusCode.OK]) == 16

    def test_str_enum_equality(self):
        assert StatusCode.INTERNAL == "INTERNAL"


class TestMessages:

    def test_image_request_accepts_ints(self):
        request = ImageRequest(image_data=[0, 1, 2])

        assert request.image_data == [0.0, 1.0, 2.0]

    def test_image_request_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            ImageRequest(image_data=["abc"])

    def test_image_request_requires_image_data(self):
        with pytest.raises(ValidationError):
            ImageRequest()

    def test_messages_are_frozen(self):
        response = ScoreResponse(scores=[0.5])

        with pytest.raises(ValidationError):
            response.scores = [1.0]


class TestModelShape:

    def test_reference_dimensions(self):
        shape = ModelShape(image_size=150, num_channels=1, num_labels=4)

        assert shape.image_data_size == 22500
        assert shape.input_shape == (1, 22500)
        assert shape.output_shape == (1, 4)

    def test_multi_channel(self):
        shape = ModelShape(image_size=3, num_channels=3, num_labels=10)

        assert shape.image_data_size == 27
        assert shape.output_shape == (1, 10)

    @pytest.mark.parametrize("field", ["image_size", "num_channels", "num_labels"])
    def test_dimensions_must_be_positive(self, field):
        values = {"image_size": 2, "num_channels": 1, "num_labels": 4, field: 0}

        with pytest.raises(ValidationError):
            ModelShape(**values)

    def test_from_settings(self, test_settings):
        shape = ModelShape.from_settings(test_settings)

        assert shape == ModelShape(image_size=2, num_channels=1, num_labels=4)


class TestSettings:

    def test_defaults_match_reference_model(self, monkeypatch):
        for name in ("IMAGE_SIZE", "NUM_CHANNELS", "NUM_LABELS", "GRPC_PORT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.IMAGE_SIZE == 150
        assert settings.NUM_CHANNELS == 1
        assert settings.NUM_LABELS == 4
        assert settings.GRPC_PORT == 9000
        assert settings.SIGNATURE_KEY == "default"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("IMAGE_SIZE", "64")
        monkeypatch.setenv("MODEL_VERSION", "7")

        settings = Settings(_env_file=None)

        assert settings.IMAGE_SIZE == 64
        assert settings.MODEL_VERSION == "7"
