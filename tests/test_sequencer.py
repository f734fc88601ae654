import logging

import pytest

from colorgame.sequencer import PeriodSequencer


def test_labels_are_prefix_plus_three_digits():
    seq = PeriodSequencer(prefix="127927270", start=867)
    assert seq.next() == "127927270868"
    assert seq.next() == "127927270869"


def test_counter_wraps_from_999_to_000():
    seq = PeriodSequencer(prefix="P", start=867)
    labels = [seq.next() for _ in range(133)]

    assert labels[131] == "P999"
    assert labels[132] == "P000"
    assert seq.next() == "P001"


@pytest.mark.django_db
def test_defaults_come_from_settings(settings):
    settings.COLOR_PERIOD_PREFIX = "2026"
    settings.COLOR_SEQUENCE_DEFAULT = 41

    seq = PeriodSequencer()
    seq.seed_from_history()

    assert seq.next() == "2026042"


@pytest.mark.django_db
def test_seed_from_history_continues_after_latest_round(make_round):
    make_round(period_number="127927270500", seconds_ago=60)
    make_round(period_number="127927270501", seconds_ago=30)

    seq = PeriodSequencer(prefix="127927270", start=867)
    assert seq.seed_from_history() == 501
    assert seq.next() == "127927270502"


@pytest.mark.django_db
def test_seed_with_unparsable_label_keeps_default(make_round):
    make_round(period_number="legacy-x")

    seq = PeriodSequencer(prefix="127927270", start=867)
    assert seq.seed_from_history() == 867
    assert seq.next() == "127927270868"


def test_wrap_is_logged_as_error(caplog):
    seq = PeriodSequencer(prefix="127927270", start=998)

    with caplog.at_level(logging.ERROR, logger="colorgame.sequencer"):
        seq.next()
        assert not caplog.records
        assert seq.next() == "127927270000"

    assert caplog.records[0].levelno == logging.ERROR
    assert "rotate COLOR_PERIOD_PREFIX" in caplog.text
