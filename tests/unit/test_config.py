"""
Tests for sweep configuration.
"""

import json

import pytest
import yaml

from aws_lambda_sweetspot.config_module import SweepConfig
from aws_lambda_sweetspot.exceptions import ConfigurationError, InvalidPayloadError
from tests.utils.mock_aws import TEST_FUNCTION_ARN


class TestSweepConfig:
    """Test SweepConfig validation."""

    def test_defaults(self):
        config = SweepConfig(function_arn=TEST_FUNCTION_ARN)

        assert config.region == "us-east-1"
        assert config.memory_sizes is None
        assert config.settle_delay == 8.0
        assert config.settle_strategy == "fixed"
        assert config.output_format == "json"
        assert config.visualize is True

    def test_region_from_arn(self):
        config = SweepConfig(function_arn="arn:aws:lambda:eu-west-1:123456789012:function:f")
        assert config.region == "eu-west-1"

    def test_explicit_region_kept(self):
        config = SweepConfig(function_arn=TEST_FUNCTION_ARN, region="us-west-2")
        assert config.region == "us-west-2"

    @pytest.mark.parametrize("arn", ["", "my-function", "arn:aws:lambda", "arn:aws:lambda::123:function:f"])
    def test_invalid_arn(self, arn):
        with pytest.raises(ConfigurationError):
            SweepConfig(function_arn=arn)

    def test_invalid_payload(self):
        with pytest.raises(InvalidPayloadError):
            SweepConfig(function_arn=TEST_FUNCTION_ARN, payload="{not json")

    def test_dict_payload(self):
        config = SweepConfig(function_arn=TEST_FUNCTION_ARN, payload={"key": "value"})
        assert config.payload == {"key": "value"}

    @pytest.mark.parametrize("sizes", [[], [0], [-128], [128, "512"], [True]])
    def test_invalid_memory_sizes(self, sizes):
        with pytest.raises(ConfigurationError):
            SweepConfig(function_arn=TEST_FUNCTION_ARN, memory_sizes=sizes)

    def test_negative_settle_delay(self):
        with pytest.raises(ConfigurationError, match="settle_delay"):
            SweepConfig(function_arn=TEST_FUNCTION_ARN, settle_delay=-1)

    def test_invalid_strategy(self):
        with pytest.raises(ConfigurationError, match="settle strategy"):
            SweepConfig(function_arn=TEST_FUNCTION_ARN, settle_strategy="hope")

    def test_invalid_output_format(self):
        with pytest.raises(ConfigurationError, match="output format"):
            SweepConfig(function_arn=TEST_FUNCTION_ARN, output_format="xml")


class TestConfigFiles:
    """Test loading and saving configuration files."""

    def test_from_dict_requires_arn(self):
        with pytest.raises(ConfigurationError, match="function_arn is required"):
            SweepConfig.from_dict({"memory_sizes": [128]})

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="iterations"):
            SweepConfig.from_dict({"function_arn": TEST_FUNCTION_ARN, "iterations": 10})

    def test_json_round_trip(self, sample_config, tmp_path):
        path = tmp_path / "config.json"
        sample_config.save(str(path))

        with open(path) as f:
            assert json.load(f)["memory_sizes"] == [128, 512, 1024]

        loaded = SweepConfig.from_file(str(path))
        assert loaded == sample_config

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "function_arn": TEST_FUNCTION_ARN,
                    "memory_sizes": [128, 256],
                    "settle_strategy": "poll",
                }
            )
        )

        config = SweepConfig.from_file(str(path))

        assert config.memory_sizes == [128, 256]
        assert config.settle_strategy == "poll"

    def test_save_yaml(self, sample_config, tmp_path):
        path = tmp_path / "nested" / "config.yml"
        sample_config.save(str(path))

        data = yaml.safe_load(path.read_text())
        assert data["function_arn"] == TEST_FUNCTION_ARN

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Could not load configuration"):
            SweepConfig.from_file(str(tmp_path / "missing.json"))

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            SweepConfig.from_file(str(path))
