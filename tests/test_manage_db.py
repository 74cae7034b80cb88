"""
Tests for the database management script.
"""

import uuid
from decimal import Decimal

import pytest

from subto import manage_db
from subto.manage_db import SAMPLE_PROPERTIES, build_parser, build_sample_listing, main
from subto.models.property import PropertyStatus


class TestSampleListings:

    def test_annual_costs_become_monthly(self):
        owner_id = uuid.uuid4()

        listing = build_sample_listing(SAMPLE_PROPERTIES[0], owner_id)

        assert listing["property_taxes"] == Decimal("316.67")
        assert listing["insurance"] == Decimal("100.00")
        assert "annual_taxes" not in listing
        assert listing["user_id"] == owner_id
        assert listing["status"] == PropertyStatus.ACTIVE
        assert listing["asking_price"] == Decimal("185000")

    def test_every_sample_is_complete(self):
        for sample in SAMPLE_PROPERTIES:
            listing = build_sample_listing(sample, uuid.uuid4())
            assert listing["current_loan_balance"] < listing["property_value"]
            assert listing["years_remaining"] > 0

    def test_some_samples_are_featured(self):
        assert any(sample["featured"] for sample in SAMPLE_PROPERTIES)


class TestCommandLine:

    def test_seed_requires_owner(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["seed"])

    def test_seed_parses_owner_id(self):
        owner_id = uuid.uuid4()
        args = build_parser().parse_args(["seed", "--owner-id", str(owner_id)])
        assert args.owner_id == owner_id

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "create-tables" in capsys.readouterr().out

    def test_reset_requires_confirm(self, capsys):
        assert main(["reset"]) == 1
        assert "--confirm" in capsys.readouterr().out

    def test_reset_refused_in_production(self, monkeypatch, capsys):
        monkeypatch.setattr(manage_db.settings, "environment", "production")

        assert main(["reset", "--confirm"]) == 1
        assert "not allowed in production" in capsys.readouterr().out
