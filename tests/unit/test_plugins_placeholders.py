"""Unit tests for config placeholder resolution."""

import pytest

from region_provider.plugins.placeholders import resolve_config_placeholders


@pytest.mark.unit
class TestResolveConfigPlaceholders:
    """Tests for resolve_config_placeholders."""

    def test_resolves_nested_strings(self):
        config = {
            "regionId": "federal",
            "dataSources": [
                {
                    "url": "https://api.open.fec.gov/v1/schedules/schedule_a/?contributor_state=${stateCode}",
                    "dataType": "campaign_finance",
                    "hints": ["Only ${stateCode} committees"],
                },
            ],
        }

        resolved = resolve_config_placeholders(config, {"stateCode": "CA"})

        source = resolved["dataSources"][0]
        assert source["url"].endswith("contributor_state=CA")
        assert source["hints"] == ["Only CA committees"]
        assert resolved["regionId"] == "federal"

    def test_unknown_placeholders_left_as_is(self):
        resolved = resolve_config_placeholders(
            {"url": "https://example.com/${cycle}/${stateCode}"},
            {"stateCode": "TX"},
        )

        assert resolved["url"] == "https://example.com/${cycle}/TX"

    def test_input_is_not_mutated(self):
        config = {"url": "${stateCode}", "nested": {"values": ["${stateCode}"]}}

        resolved = resolve_config_placeholders(config, {"stateCode": "CA"})

        assert config == {"url": "${stateCode}", "nested": {"values": ["${stateCode}"]}}
        assert resolved["nested"]["values"] == ["CA"]

    def test_empty_variables_returns_copy(self):
        config = {"url": "${stateCode}", "hints": ["a"]}

        resolved = resolve_config_placeholders(config, {})

        assert resolved == config
        assert resolved is not config
        assert resolved["hints"] is not config["hints"]

    @pytest.mark.parametrize("value", [42, 1.5, True, None])
    def test_non_string_scalars_unchanged(self, value):
        assert resolve_config_placeholders({"value": value}, {"stateCode": "CA"}) == {"value": value}

    def test_tuples_are_resolved(self):
        resolved = resolve_config_placeholders(("${stateCode}", "x"), {"stateCode": "NY"})

        assert resolved == ("NY", "x")
