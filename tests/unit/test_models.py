"""
Tests for data models.
"""

from datetime import datetime

import pytest

from aws_lambda_sweetspot.models import (
    FunctionConfiguration,
    SweepFailure,
    SweepResult,
    SweepSession,
)


class TestFunctionConfiguration:
    """Test architecture detection."""

    def test_defaults_to_x86(self):
        assert FunctionConfiguration(memory_size=128).architecture == "x86_64"

    def test_empty_architectures_mean_x86(self):
        config = FunctionConfiguration(memory_size=128, architectures=[])
        assert config.architectures == ["x86_64"]
        assert config.architecture == "x86_64"

    def test_arm64(self):
        assert FunctionConfiguration(memory_size=128, architectures=["arm64"]).architecture == "arm64"

    def test_arm64_wins_when_listed(self):
        config = FunctionConfiguration(memory_size=128, architectures=["x86_64", "arm64"])
        assert config.architecture == "arm64"

    def test_unknown_label_reported_as_x86(self):
        config = FunctionConfiguration(memory_size=128, architectures=["riscv64"])
        assert config.architecture == "x86_64"


class TestSweepResult:
    """Test result construction."""

    def test_cost_is_duration_times_price(self):
        result = SweepResult.measured(512, 9.0, 0.0000000083)
        assert result.cost == pytest.approx(7.47e-8)
        assert result.usable

    def test_degraded_result(self):
        result = SweepResult.degraded(128, "abc", "Duration not found in logs")
        assert result.duration_ms == 0.0
        assert result.cost == 0.0
        assert not result.usable
        assert result.extraction_error == "Duration not found in logs"

    def test_results_are_immutable(self):
        result = SweepResult.measured(128, 1.0, 0.0000000021)
        with pytest.raises(AttributeError):
            result.duration_ms = 2.0

    def test_to_dict_omits_log_by_default(self):
        result = SweepResult.measured(128, 1.0, 0.0000000021, raw_log="bG9n")
        assert "raw_log" not in result.to_dict()
        assert result.to_dict(include_log=True)["raw_log"] == "bG9n"


class TestSweepSession:
    """Test session bookkeeping."""

    def test_usable_results(self, sample_results):
        session = SweepSession(
            function_arn="arn:aws:lambda:us-east-1:123456789012:function:f",
            results=sample_results + [SweepResult.degraded(2048, "", "empty")],
        )
        assert len(session.results) == 4
        assert [r.memory_size for r in session.usable_results] == [128, 512, 1024]

    def test_from_dict_restores_saved_session(self, sample_session):
        sample_session.started_at = datetime(2024, 1, 1, 12, 0, 0)
        sample_session.failures.append(SweepFailure(2048, "reconfigure", "throttled"))

        restored = SweepSession.from_dict(sample_session.to_dict())

        assert restored.function_arn == sample_session.function_arn
        assert restored.original_memory == 256
        assert restored.results == sample_session.results
        assert restored.failures[0].stage == "reconfigure"
        assert restored.started_at == datetime(2024, 1, 1, 12, 0, 0)
        assert restored.completed_at is None

    def test_from_dict_ignores_summary_block(self, sample_session):
        data = sample_session.to_dict()
        data["summary"] = {"performance_memory": 1024}
        assert SweepSession.from_dict(data).architecture == "x86_64"
