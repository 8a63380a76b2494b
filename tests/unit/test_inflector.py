"""Unit tests for inflection helpers."""

from datetime import date

import pytest

from web_helpers import inflector
from web_helpers.exceptions import InvalidArgumentError
from web_helpers.i18n import set_language


# February 2024 has 29 days
TODAY = date(2024, 2, 10)


class TestSlug:
    """Test transliteration and slugs."""

    def test_transliterate(self):
        """Test Cyrillic letters are replaced."""
        assert inflector.transliterate("щука ёж, объём") == "schuka ezh, obem"

    def test_slug(self):
        """Test slug from Russian text."""
        assert inflector.slug("  Чайник Tefal + подставка @ дом ") == "chaynik-tefal-plus-podstavka-at-dom"

    def test_slug_special_chars(self):
        """Test disallowed chars and dashes at edges."""
        assert inflector.slug("Цена: 100$") == "tsena-100"
        assert inflector.slug("---Тест---") == "test"
        assert inflector.slug("file_name.v2~beta") == "file_name.v2~beta"

    def test_slug_collapses_dashes(self):
        """Test dash runs become a single separator."""
        assert inflector.slug("a -- b") == "a-b"

    def test_slug_replacement(self):
        """Test custom separator."""
        assert inflector.slug("Новый год 2025", "_") == "novyy_god_2025"

    def test_slug_keep_case(self):
        """Test latin case is kept without lowercase."""
        assert inflector.slug("Hello World", lowercase=False) == "Hello-World"

    def test_slug_blank(self):
        """Test blank text gives empty slug."""
        assert inflector.slug(" \t\n ") == ""
        assert inflector.slug("") == ""


class TestNumDeclension:
    """Test word forms for counts."""

    def test_num_declension(self):
        """Test Russian plural rules."""
        cases = {
            0: "товаров",
            1: "товар",
            2: "товара",
            4: "товара",
            5: "товаров",
            11: "товаров",
            12: "товаров",
            14: "товаров",
            21: "товар",
            22: "товара",
            25: "товаров",
            101: "товар",
            111: "товаров",
            112: "товаров",
            -1: "товар",
            "34": "товара",
        }

        for count, expected in cases.items():
            assert inflector.num_declension(count, "товар", "товара", "товаров") == expected, count

    def test_invalid_count(self):
        """Test non-numeric count."""
        with pytest.raises(InvalidArgumentError):
            inflector.num_declension("abc", "a", "b", "c")

    def test_word_helpers(self):
        """Test predefined word forms."""
        assert inflector.num_prods(3) == "товара"
        assert inflector.num_models(5) == "моделей"
        assert inflector.num_reviews(1) == "отзыв"
        assert inflector.num_shops(2) == "магазина"
        assert inflector.num_minutes(21) == "минута"
        assert inflector.num_hours(11) == "часов"
        assert inflector.num_days(3) == "дня"
        assert inflector.num_weeks(1) == "неделя"
        assert inflector.num_months(6) == "месяцев"
        assert inflector.num_years(5) == "лет"

    def test_translated_words(self):
        """Test word forms in the active language."""
        set_language("en")

        assert inflector.num_prods(1) == "product"
        assert inflector.num_days(3) == "days"


class TestDaysTerm:
    """Test term formatting."""

    def test_days_term(self):
        """Test terms in Russian."""
        cases = {
            0: "сегодня",
            1: "завтра",
            2: "послезавтра",
            3: "через 3 дня",
            5: "через 5 дней",
            7: "через неделю",
            14: "через 2 недели",
            21: "через 3 недели",
            28: "через 28 дней",
            29: "через месяц",
            30: "через 30 дней",
            40: "21 марта",
            61: "через 2 месяца",
        }

        for days, expected in cases.items():
            assert inflector.days_term(days, TODAY) == expected, days

    def test_days_term_english(self):
        """Test terms in English."""
        set_language("en")

        assert inflector.days_term(1, TODAY) == "tomorrow"
        assert inflector.days_term(5, TODAY) == "in 5 days"
        assert inflector.days_term(40, TODAY) == "21 March"

    def test_negative_days(self):
        """Test negative term is rejected."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            inflector.days_term(-1)

        assert exc_info.value.argument == "days"


class TestSchedule:
    """Test weekday grouping and schedules."""

    def test_group_days(self):
        """Test consecutive days are grouped."""
        assert inflector.group_days([0, 1, 2, 4, 6]) == ["Пн-Ср", "Пт", "Вс"]
        assert inflector.group_days([0, 2]) == ["Пн", "Ср"]
        assert inflector.group_days([5]) == ["Сб"]
        assert inflector.group_days([]) == []

    def test_short_schedule(self):
        """Test schedule grouping by work time."""
        work = ("09:00", "18:00")
        schedule = {0: work, 1: work, 2: work, 3: work, 4: work, 5: ("11:00", "16:00"), 6: None}

        assert inflector.short_schedule(schedule) == {
            "Пн-Пт": "09:00 - 18:00",
            "Сб": "11:00 - 16:00",
            "Вс": "выходной",
        }

    def test_short_schedule_list(self):
        """Test schedule as a list with missing days."""
        schedule = [("10:00", "20:00")] * 5

        assert inflector.short_schedule(schedule) == {
            "Пн-Пт": "10:00 - 20:00",
            "Сб-Вс": "выходной",
        }

    def test_short_schedule_gaps(self):
        """Test same hours on separate days."""
        work = ("09:00", "18:00")

        assert inflector.short_schedule({0: work, 2: work}) == {
            "Пн,Ср": "09:00 - 18:00",
            "Вт,Чт-Вс": "выходной",
        }

    def test_short_schedule_empty(self):
        """Test empty schedule."""
        assert inflector.short_schedule(None) == {}
        assert inflector.short_schedule({}) == {}

    def test_short_schedule_english(self):
        """Test translated weekdays."""
        set_language("en")
        work = ("09:00", "18:00")

        assert inflector.short_schedule({5: work, 6: work}) == {
            "Sat-Sun": "09:00 - 18:00",
            "Mon-Fri": "day off",
        }


class TestTemplateShortcuts:
    """Test template functions exposed by inflector."""

    def test_var_value(self, template_vars):
        """Test delegation to template engine."""
        assert inflector.var_value(template_vars, "prod|name|esc") == "&lt;Чайник&gt;"

    def test_replace_vars(self, template_vars):
        """Test text substitution."""
        assert inflector.replace_vars("Цвет: ${color|trim}.", template_vars) == "Цвет: red."
        assert inflector.replace_block_vars("${color|upper}", template_vars) == "RED "
