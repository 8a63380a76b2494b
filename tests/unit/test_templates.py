"""Unit tests for the template engine."""

from datetime import date

from structlog.testing import capture_logs

from web_helpers.events import HelperEvents
from web_helpers.templates import TemplateEngine


VAR_VALUE_CASES = {
    "": None,
    "color": "red ",
    "color|upper": "RED ",
    "color|lower|trim": "red",
    "color|lower|unknown": None,
    "prod": None,
    "prod|name|esc": "&lt;Чайник&gt;",
    "prod|price": "",
    "prod|unknown": None,
    "obj": None,
    "obj|field": "12345",
    "obj|field|asInteger": "12,345",
    "obj|field|unknown|trim": None,
    "unknown": None,
    "unknown|number": None,
}

BLOCK_CASES = [
    ("правильное значение ${color|upper} переменной", {}, "правильное значение RED переменной"),
    ("несуществующее значение ${} переменной", {}, "несуществующее значение ${} переменной"),
    ("очистка ${null} переменной", {"clean_vars": True}, "очистка переменной"),
    ("очистка ${null} текста", {"clean_text": True}, ""),
]

REPLACE_CASES = [
    ("Текст без блоков и переменных", {}, "Текст без блоков и переменных"),
    ("Текст без блоков с ${color} переменной", {}, "Текст без блоков с red переменной"),
    (
        "Текст без блоков с неизвестной очищаемой ${unknown} переменной",
        {"clean_vars": True},
        "Текст без блоков с неизвестной очищаемой переменной",
    ),
    ("Текст без блоков очищаемый с неизвестной ${unknown} переменной", {"clean_text": True}, ""),
    ("Текст [[с ${color} блоком]] переменной", {}, "Текст с red блоком переменной"),
    ("Текст [[с ${} неизвестной]] переменной", {}, "Текст с ${} неизвестной переменной"),
    (
        "Текст [[с очищаемой ${} неизвестной]] переменной",
        {"clean_vars": True},
        "Текст с очищаемой неизвестной переменной",
    ),
    ("Текст [[с очищаемым ${} блоком]] переменной", {"clean_text": True}, "Текст переменной"),
    ("Текст с переменной в конце ${color}", {}, "Текст с переменной в конце red "),
    ("[[Блок текста с переменной в конце ${color}]]", {}, "Блок текста с переменной в конце red "),
    ("Несколько пробелов ${color}  ${} в середине", {}, "Несколько пробелов red ${} в середине"),
]


class TestVarValue:
    """Test placeholder path resolution."""

    def test_var_value_cases(self, template_vars):
        """Test lookups and filters."""
        for path, expected in VAR_VALUE_CASES.items():
            assert TemplateEngine.var_value(template_vars, path) == expected, path

    def test_empty_vars(self):
        """Test empty variables resolve nothing."""
        assert TemplateEngine.var_value({}, "color") is None

    def test_sequence_index(self):
        """Test list items by index."""
        variables = {"items": ["a", "b"]}

        assert TemplateEngine.var_value(variables, "items|1") == "b"
        assert TemplateEngine.var_value(variables, "items|5") is None

    def test_integer_keys(self):
        """Test mapping with integer keys."""
        assert TemplateEngine.var_value({0: "zero"}, "0") == "zero"

    def test_booleans(self):
        """Test booleans are stringified."""
        assert TemplateEngine.var_value({"on": True, "off": False}, "on") == "1"
        assert TemplateEngine.var_value({"on": True, "off": False}, "off") == ""

    def test_case_filters(self):
        """Test first letter filters."""
        variables = {"name": "чайник", "title": "Чайник"}

        assert TemplateEngine.var_value(variables, "name|ucfirst") == "Чайник"
        assert TemplateEngine.var_value(variables, "title|lcfirst") == "чайник"

    def test_format_filters(self):
        """Test formatter filters."""
        variables = {"price": "1234.5", "day": date(2024, 3, 5)}

        assert TemplateEngine.var_value(variables, "price|asCurrency") == "RUB 1,234.50"
        assert TemplateEngine.var_value(variables, "day|asDate") == "05.03.2024"

    def test_failed_filter(self):
        """Test filter failure leaves value unresolved."""
        assert TemplateEngine.var_value({"x": "abc"}, "x|asInteger") is None

    def test_failed_filter_out_of_range(self):
        """Test non-finite numbers and huge timestamps leave value unresolved."""
        assert TemplateEngine.var_value({"n": "nan"}, "n|asInteger") is None
        assert TemplateEngine.var_value({"n": "inf"}, "n|asCurrency") is None
        assert TemplateEngine.var_value({"d": "99999999999999"}, "d|asDate") is None

    def test_non_ascii_digit_key(self):
        """Test keys made of non-ASCII digits are not indexes."""
        assert TemplateEngine.var_value({"a": "1"}, "²") is None
        assert TemplateEngine.var_value({"items": ["a"]}, "items|²") is None
        assert TemplateEngine.var_value({"items": ["a"]}, "items|٠") is None

    def test_filter_on_container(self):
        """Test filters are not applied to containers."""
        assert TemplateEngine.var_value({"prod": {"name": "x"}}, "prod|upper") is None

    def test_private_attributes(self):
        """Test private attributes are not exposed."""

        class Secret:
            _token = "abc"

        assert TemplateEngine.var_value({"s": Secret()}, "s|_token") is None


class TestReplaceBlockVars:
    """Test block substitution."""

    def test_block_cases(self, template_vars):
        """Test substitution and cleaning options."""
        for text, options, expected in BLOCK_CASES:
            assert TemplateEngine.replace_block_vars(text, template_vars, **options) == expected, text

    def test_unchanged_without_vars(self):
        """Test text is returned as is without vars and options."""
        text = "text  ${a} ,"
        assert TemplateEngine.replace_block_vars(text) == text

    def test_punctuation_spacing(self):
        """Test spaces before punctuation and line breaks are removed."""
        text = "цвет ${color} , размер ${size} !  \nконец"
        expected = "цвет red, размер L!\nконец"

        assert TemplateEngine.replace_block_vars(text, {"color": "red", "size": "L"}) == expected

    def test_unresolved_logged(self):
        """Test unresolved placeholders are logged."""
        with capture_logs() as logs:
            TemplateEngine.replace_block_vars("${missing}", {"a": 1})

        assert logs[0]["event"] == HelperEvents.TEMPLATE_UNRESOLVED.value
        assert logs[0]["placeholder"] == "${missing}"


class TestReplaceVars:
    """Test text substitution with blocks."""

    def test_replace_cases(self, template_vars):
        """Test blocks and cleaning options."""
        for text, options, expected in REPLACE_CASES:
            assert TemplateEngine.replace_vars(text, template_vars, **options) == expected, text

    def test_none_text(self):
        """Test None text gives empty string."""
        assert TemplateEngine.replace_vars(None, {"a": 1}) == ""

    def test_unresolvable_placeholders_kept(self):
        """Test bad index keys and failed filters keep the placeholder."""
        assert TemplateEngine.replace_vars("x ${items|²}", {"items": ["a"]}) == "x ${items|²}"
        assert TemplateEngine.replace_vars("${n|asInteger}", {"n": "nan"}) == "${n|asInteger}"
        assert TemplateEngine.replace_vars("Date ${d|asDate}.", {"d": "99999999999999"}, clean_vars=True) == "Date."

    def test_optional_blocks(self):
        """Test blocks with unresolved placeholders are dropped."""
        text = "Купить [[${color} ]]чайник[[ за ${price}]]"

        assert TemplateEngine.replace_vars(text, {"color": "красный"}, clean_text=True) == "Купить красный чайник"
        assert TemplateEngine.replace_vars(text, {"price": 100}, clean_text=True) == "Купить чайник за 100"
