# tests/test_parser/test_values.py
import pytest

from spicelib_core.parser import ValueParseError, parse_model_parameter_value, parse_value


class TestParseValue:
    """Component value decoding: suffixes, unit letters and the milli/mega heuristic."""

    @pytest.mark.parametrize("token, expected", [
        ("4.7k", 4700.0),
        ("4.7K", 4700.0),
        ("0.05mH", 5e-5),
        ("1MEG", 1e6),
        ("2.2Meg", 2.2e6),
        ("1e-6", 1e-6),
        ("100", 100.0),
        ("-12", -12.0),
        ("+.5", 0.5),
        ("10pF", 1e-11),
        ("10fF", 1e-14),
        ("2G", 2e9),
        ("3T", 3e12),
        ("47u", 47e-6),
        ("100n", 100e-9),
        ("1.5e3k", 1.5e6),
        ("0.143682H", 0.143682),
        ("12V", 12.0),
        ("8O", 8.0),
        ("5W", 5.0),
        ("2S", 2.0),
    ])
    def test_decodes_suffixes(self, token, expected):
        assert parse_value(token) == pytest.approx(expected)

    def test_trailing_a_is_atto_not_ampere(self):
        assert parse_value("3A") == pytest.approx(3e-18)

    def test_single_f_is_femto_and_not_stripped_as_unit(self):
        # A lone trailing 'F' after a number is the farad unit letter...
        assert parse_value("1F") == pytest.approx(1.0)
        # ...but a double 'F' leaves one behind to be read as femto.
        assert parse_value("1FF") == pytest.approx(1e-15)

    @pytest.mark.parametrize("token, expected", [
        ("1M", 1e-3),
        ("999M", 0.999),
        ("-999m", -0.999),
        ("1000M", 1e9),
        ("2500m", 2.5e9),
    ])
    def test_lone_m_resolves_milli_below_1000_and_mega_otherwise(self, token, expected):
        assert parse_value(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_empty_input_is_zero(self, token):
        assert parse_value(token) == 0.0

    @pytest.mark.parametrize("token", ["abc", "4.7x", "1..2", "inf", "nan", "1_000", "F", "k", "100mA"])
    def test_invalid_tokens_raise_value_parse_error(self, token):
        with pytest.raises(ValueParseError) as excinfo:
            parse_value(token)

        assert excinfo.value.token == token
        report = excinfo.value.get_diagnostic_report()
        assert "Invalid Numeric Value" in report
        assert f"User Input:     '{token}'" in report


class TestParseModelParameterValue:
    """The narrower grammar used inside `.MODEL` parameter lists."""

    @pytest.mark.parametrize("token, expected", [
        ("2.52n", 2.52e-9),
        ("1E-14", 1e-14),
        ("-.5", -0.5),
        ("4p", 4e-12),
        ("1.304m", 1.304e-3),
        ("1.304M", 1.304e-3),
        ("10k", 1e4),
        ("3G", 3e9),
        ("14.34f", 14.34e-15),
        ("100", 100.0),
    ])
    def test_decodes_single_letter_suffix(self, token, expected):
        assert parse_model_parameter_value(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["1MEG", "10uF", "abc", ""])
    def test_rejects_tokens_outside_the_narrow_grammar(self, token):
        assert parse_model_parameter_value(token) is None
