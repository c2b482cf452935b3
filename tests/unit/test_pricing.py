"""
Tests for the pricing model.
"""

import json

import pytest
import yaml

from aws_lambda_sweetspot.exceptions import ConfigurationError
from aws_lambda_sweetspot.pricing import (
    ARM64_PRICES,
    X86_64_PRICES,
    PricingModel,
    get_pricing_table,
)


class TestPricingModel:
    """Test price table lookups."""

    def test_builtin_x86_prices(self):
        table = get_pricing_table("x86_64")
        assert table[128] == 0.0000000021
        assert table[10240] == 0.0000001667
        assert len(table) == 13

    def test_builtin_arm_prices(self):
        table = get_pricing_table("arm64")
        assert table[128] == 0.0000000017
        assert table[1024] == 0.0000000133

    def test_tables_cover_the_same_sizes(self):
        assert sorted(X86_64_PRICES) == sorted(ARM64_PRICES)

    def test_arm_is_cheaper_for_every_size(self):
        for memory, price in ARM64_PRICES.items():
            assert price < X86_64_PRICES[memory]

    @pytest.mark.parametrize("label", ["", "riscv64", "x86", "ARM64"])
    def test_unknown_architecture_falls_back_to_x86(self, label):
        model = PricingModel()
        assert model.lookup(label) is model.lookup("x86_64")

    def test_memory_sizes_ascending(self):
        sizes = PricingModel().memory_sizes("arm64")
        assert sizes == sorted(sizes)
        assert sizes[0] == 128
        assert sizes[-1] == 10240

    def test_tables_are_read_only(self):
        table = PricingModel().lookup("x86_64")
        with pytest.raises(TypeError):
            table[128] = 1.0

    def test_custom_tables_with_string_keys(self):
        model = PricingModel.from_dict({"x86_64": {"128": "0.000000002", "256": 0.000000004}})
        assert model.lookup("x86_64") == {128: 0.000000002, 256: 0.000000004}
        assert model.architectures == ["x86_64"]

    def test_x86_table_required(self):
        with pytest.raises(ConfigurationError, match="x86_64"):
            PricingModel({"arm64": {128: 0.0000000017}})

    @pytest.mark.parametrize(
        "table",
        [
            {},
            {128: 0},
            {128: -0.1},
            {"abc": 0.1},
            {128: "cheap"},
            {0: 0.1},
        ],
    )
    def test_invalid_tables_rejected(self, table):
        with pytest.raises(ConfigurationError):
            PricingModel({"x86_64": table})

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "prices.json"
        path.write_text(json.dumps({"x86_64": {"128": 0.000000003}, "arm64": {"128": 0.000000002}}))

        model = PricingModel.from_file(str(path))

        assert model.lookup("arm64")[128] == 0.000000002
        assert model.lookup("x86_64")[128] == 0.000000003

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "prices.yaml"
        path.write_text(yaml.safe_dump({"x86_64": {128: 0.000000003, 512: 0.00000001}}))

        model = PricingModel.from_file(str(path))

        assert model.memory_sizes("x86_64") == [128, 512]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Could not load pricing file"):
            PricingModel.from_file(str(tmp_path / "missing.json"))

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "prices.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            PricingModel.from_file(str(path))
