"""
Unit tests for application settings.

Run: pytest tests/unit/test_settings.py -v
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


def make_settings(**overrides) -> Settings:
    return Settings(
        supabase_url="https://test-project.supabase.co",
        supabase_key="test-anon-key",
        **overrides
    )


class TestSyncInterval:
    """sync_interval_hours and its cron expression"""

    @pytest.mark.parametrize("hours,cron", [
        (1, "0 */1 * * *"),
        (2, "0 */2 * * *"),
        (6, "0 */6 * * *"),
        (24, "0 */24 * * *"),
    ])
    def test_cron_expression(self, hours, cron):
        assert make_settings(sync_interval_hours=hours).sync_cron_expression == cron

    @pytest.mark.parametrize("hours", [5, 7, 10, 18])
    def test_interval_must_divide_day(self, hours):
        with pytest.raises(ValidationError):
            make_settings(sync_interval_hours=hours)

    @pytest.mark.parametrize("hours", [0, 25])
    def test_interval_out_of_range(self, hours):
        with pytest.raises(ValidationError):
            make_settings(sync_interval_hours=hours)
