"""Tests for the browser session key/value codec."""

import logging

import pytest

from flipscore.data.session_codec import (
    KEY_ARV,
    KEY_DAYS_ON_MARKET,
    KEY_LOCATION_SCORE,
    KEY_SEEN_TUTORIAL,
    KEY_SHARE_COUNT,
    decode_session,
    encode_session,
    mark_tutorial_seen,
)
from flipscore.models.deal import RawDealInput
from flipscore.models.session import SessionState


class TestEncode:
    def test_plain_text_values(self, canonical_raw):
        data = encode_session(SessionState(deal=canonical_raw, share_count=3, seen_tutorial=True))
        assert all(isinstance(k, str) and isinstance(v, str) for k, v in data.items())
        assert data[KEY_ARV] == "$300,000"
        assert data[KEY_LOCATION_SCORE] == "8"
        assert data[KEY_SHARE_COUNT] == "3"
        assert data[KEY_SEEN_TUTORIAL] == "true"

    def test_missing_days_encoded_empty(self):
        data = encode_session(SessionState(deal=RawDealInput(days_on_market=None)))
        assert data[KEY_DAYS_ON_MARKET] == ""


class TestDecode:
    def test_restores_encoded_state(self, canonical_raw):
        state = SessionState(deal=canonical_raw, share_count=4, seen_tutorial=True)
        assert decode_session(encode_session(state)) == state

    def test_empty_store(self):
        assert decode_session(None) == SessionState()
        assert decode_session({}) == SessionState()

    def test_partial_store_uses_defaults(self):
        state = decode_session({KEY_ARV: "250000"})
        assert state.deal.after_repair_value == "250000"
        assert state.deal.location_score == 5
        assert state.share_count == 0
        assert state.seen_tutorial is False

    def test_malformed_values_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            state = decode_session({
                KEY_LOCATION_SCORE: "great",
                KEY_SHARE_COUNT: "-3",
                KEY_SEEN_TUTORIAL: "maybe",
            })
        assert state.deal.location_score == 5
        assert state.share_count == 0
        assert state.seen_tutorial is False
        assert "malformed" in caplog.text

    @pytest.mark.parametrize("flag", ["true", "True", "1", "yes"])
    def test_seen_tutorial_truthy(self, flag):
        assert decode_session({KEY_SEEN_TUTORIAL: flag}).seen_tutorial is True


class TestMarkTutorialSeen:
    def test_sets_flag(self):
        state = SessionState(share_count=2)
        seen = mark_tutorial_seen(state)
        assert seen.seen_tutorial is True
        assert seen.share_count == 2
        assert state.seen_tutorial is False
