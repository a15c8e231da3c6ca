"""Unit tests for campaign-finance classification."""

import pytest

from region_provider.plugins.campaign_finance import (
    CampaignFinanceKind,
    classify_item,
    partition_campaign_finance,
)


@pytest.mark.unit
class TestClassifyItem:
    """Tests for the ordered classification rules."""

    @pytest.mark.parametrize(
        "item,expected",
        [
            ({"donorName": "Pat Donor", "amount": 100}, CampaignFinanceKind.CONTRIBUTION),
            ({"payeeName": "Print Shop", "amount": 50}, CampaignFinanceKind.EXPENDITURE),
            (
                {"supportOrOppose": "oppose", "committeeName": "No on 1"},
                CampaignFinanceKind.INDEPENDENT_EXPENDITURE,
            ),
            ({"sourceSystem": "cal_access", "type": "ballot_measure"}, CampaignFinanceKind.COMMITTEE),
        ],
    )
    def test_known_shapes(self, item, expected):
        assert classify_item(item) == expected

    def test_first_match_wins(self):
        """Test that a donor name takes precedence over a payee name."""
        item = {"donorName": "Pat", "payeeName": "Shop"}

        assert classify_item(item) == CampaignFinanceKind.CONTRIBUTION

    def test_contribution_with_committee_fields(self):
        """Test that contributions carrying sourceSystem/type stay contributions."""
        item = {"donorName": "Pat", "sourceSystem": "fec", "type": "individual"}

        assert classify_item(item) == CampaignFinanceKind.CONTRIBUTION

    @pytest.mark.parametrize(
        "item",
        [
            {"committeeName": "Citizens PAC"},
            {"supportOrOppose": "support"},
            {"sourceSystem": "fec"},
            {"type": "pac"},
            {"donorName": None},
            {},
            "not a record",
            None,
            42,
        ],
    )
    def test_unknown_shapes_return_none(self, item):
        assert classify_item(item) is None


@pytest.mark.unit
class TestPartitionCampaignFinance:
    """Tests for partitioning a pool of records."""

    def test_one_of_each(self):
        pool = [
            {"donorName": "Pat"},
            {"payeeName": "Shop"},
            {"supportOrOppose": "support", "committeeName": "PAC"},
            {"sourceSystem": "fec", "type": "pac"},
        ]

        result = partition_campaign_finance(pool)

        assert len(result.contributions) == 1
        assert len(result.expenditures) == 1
        assert len(result.independent_expenditures) == 1
        assert len(result.committees) == 1

    def test_order_preserved_within_bucket(self):
        pool = [
            {"donorName": "First"},
            {"payeeName": "Shop"},
            {"donorName": "Second"},
            {"donorName": "Third"},
        ]

        result = partition_campaign_finance(pool)

        assert [c["donorName"] for c in result.contributions] == ["First", "Second", "Third"]

    def test_malformed_items_are_dropped(self):
        pool = [None, "garbage", {"unrelated": 1}, {"payeeName": "Shop"}, ["list"]]

        result = partition_campaign_finance(pool)

        assert result.expenditures == [{"payeeName": "Shop"}]
        assert result.total == 1

    def test_empty_pool(self):
        result = partition_campaign_finance([])

        assert result.total == 0
