import pytest


@pytest.fixture
def working_hours():
    return {"from": "10:00+5", "to": "18:00+5"}


@pytest.fixture
def gap_schedule():
    """Busy through ПН and ВТ bank hours, free on СР from 12:00 to 13:30 (+5)."""
    return {
        "Danny": [{"from": "ПН 09:00+5", "to": "ВТ 19:00+5"}],
        "Rusty": [{"from": "СР 10:00+5", "to": "СР 12:00+5"}],
        "Linus": [{"from": "СР 11:30+3", "to": "СР 16:00+3"}],
    }
