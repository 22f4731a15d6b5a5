"""
"Proud of yourself?" answer parsing.
Run with: python3 -m pytest tests/
"""

import pytest

from conftest import make_log


class TestParseAffirmation:
    @pytest.mark.parametrize("raw", ["yes", "YES", "Yeah", "1", "true", "True", "  yes  ", 1, True])
    def test_affirmative(self, raw):
        from app.utils.affirmation import Affirmation, parse_affirmation
        assert parse_affirmation(raw) == Affirmation.yes

    @pytest.mark.parametrize("raw", ["no", "0", "false", "not really", 0, False])
    def test_negative(self, raw):
        from app.utils.affirmation import Affirmation, parse_affirmation
        assert parse_affirmation(raw) == Affirmation.no

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_unanswered(self, raw):
        from app.utils.affirmation import Affirmation, parse_affirmation
        assert parse_affirmation(raw) == Affirmation.unanswered


class TestBoundary:
    def test_orm_property(self):
        from datetime import date
        from app.utils.affirmation import Affirmation
        assert make_log(date(2024, 1, 1), proud_of_yourself="Yeah").affirmation == Affirmation.yes

    def test_read_schema_derives_affirmation(self):
        from datetime import date
        from app.schemas.daily_log_schemas import DailyLogRead
        from app.utils.affirmation import Affirmation
        log = make_log(date(2024, 1, 1), log_id=3, proud_of_yourself="0")
        assert DailyLogRead.model_validate(log).affirmation == Affirmation.no
