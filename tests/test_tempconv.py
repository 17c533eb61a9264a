import pytest

from progdemos.tempconv import (
    Celsius,
    Fahrenheit,
    c_to_f,
    f_to_c,
    main,
    parse_celsius,
)


def test_boiling_point():
    assert f_to_c(Fahrenheit(212)) == 100
    assert c_to_f(Celsius(100)) == 212


def test_minus_forty_is_same_on_both_scales():
    assert c_to_f(Celsius(-40)) == -40
    assert f_to_c(Fahrenheit(-40)) == -40


@pytest.mark.parametrize("value", [-273.15, 0.0, 36.6, 1000.0])
def test_round_trip(value):
    assert f_to_c(c_to_f(Celsius(value))) == pytest.approx(value)


def test_str_has_unit():
    assert str(Celsius(20.0)) == "20°C"
    assert str(f_to_c(Fahrenheit(212))) == "100°C"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("100C", 100.0),
        ("100°C", 100.0),
        ("100 C", 100.0),
        ("212F", 100.0),
        ("-40°F", -40.0),
        ("32F", 0.0),
    ],
)
def test_parse_celsius(text, expected):
    result = parse_celsius(text)
    assert isinstance(result, Celsius)
    assert result == pytest.approx(expected)


@pytest.mark.parametrize("text", ["100", "100K", "C100", "", "abc"])
def test_parse_celsius_rejects(text):
    with pytest.raises(ValueError, match="invalid temperature"):
        parse_celsius(text)


def test_error_message_quotes_input():
    with pytest.raises(ValueError) as info:
        parse_celsius("100K")
    assert str(info.value) == 'invalid temperature "100K"'


def test_main_default(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "20°C\n"


def test_main_fahrenheit(capsys):
    assert main(["-temp", "212F"]) == 0
    assert capsys.readouterr().out == "100°C\n"


def test_main_invalid_value():
    with pytest.raises(SystemExit) as info:
        main(["-temp", "bogus"])
    assert info.value.code == 2