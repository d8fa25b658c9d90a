"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from siglent_converter.decoder import decode
from siglent_converter.models import (
    CODE_PER_DIV,
    MAX_WORKER_COUNT,
    ConversionSettings,
    OverflowPolicy,
    Quantity,
    RowLayout,
)


class TestEnums:
    def test_row_layout_values(self):
        assert RowLayout.REFERENCE == "reference"
        assert RowLayout.WIDE == "wide"

    def test_overflow_policy_from_string(self):
        assert OverflowPolicy("error") == OverflowPolicy.ERROR
        assert OverflowPolicy("truncate") == OverflowPolicy.TRUNCATE


class TestQuantity:
    def test_describe_with_prefix(self):
        assert Quantity(value=500.0, magnitude=7, unit=0).describe() == "500.000000 mV"

    def test_describe_without_prefix(self):
        assert Quantity(value=1e9, magnitude=8, unit=13).describe() == "1000000000.000000 Hz"

    def test_describe_unknown_codes(self):
        assert Quantity(value=2.0, magnitude=99, unit=99).describe() == "2.000000 "


class TestCaptureDescription:
    def test_is_frozen(self, two_channel_capture):
        desc = decode(two_channel_capture)
        with pytest.raises(ValidationError):
            desc.sample_count = 10

    def test_data_size(self, capture_builder):
        desc = decode(capture_builder({1: bytes(6), 2: bytes(6), 4: bytes(6)}))
        assert desc.data_size == 18
        assert desc.channel_names == ["CH1", "CH2", "CH4"]


class TestConversionSettings:
    def test_defaults(self):
        settings = ConversionSettings()
        assert settings.codes_per_division == CODE_PER_DIV == 25.0
        assert settings.worker_count == 8
        assert settings.layout == RowLayout.REFERENCE
        assert settings.on_overflow == OverflowPolicy.TRUNCATE

    def test_from_dict(self):
        settings = ConversionSettings.model_validate({"layout": "wide", "on_overflow": "error"})
        assert settings.layout == RowLayout.WIDE
        assert settings.on_overflow == OverflowPolicy.ERROR

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            ConversionSettings(worker_count=0)

    def test_rejects_non_positive_codes_per_division(self):
        with pytest.raises(ValidationError):
            ConversionSettings(codes_per_division=0)

    def test_rejects_too_many_workers(self):
        with pytest.raises(ValidationError):
            ConversionSettings(worker_count=MAX_WORKER_COUNT + 1)
        assert ConversionSettings(worker_count=MAX_WORKER_COUNT).worker_count == MAX_WORKER_COUNT
