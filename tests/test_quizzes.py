import pytest

from rustlings.solutions.quizzes import (
    Append,
    Command,
    ReportCard,
    calculate_price_of_apples,
    transformer,
)


@pytest.mark.parametrize(
    "quantity, price",
    [(35, 70), (40, 80), (41, 41), (65, 65)],
)
def test_calculate_price_of_apples(quantity, price):
    assert calculate_price_of_apples(quantity) == price


def test_transformer():
    output = transformer(
        [
            ("hello", Command.UPPERCASE),
            (" all roads lead to rome! ", Command.TRIM),
            ("foo", Append(1)),
            ("bar", Append(5)),
        ]
    )
    assert output[0] == "HELLO"
    assert output[1] == "all roads lead to rome!"
    assert output[2] == "foobar"
    assert output[3] == "barbarbarbarbarbar"


def test_transformer_rejects_unknown_command():
    with pytest.raises(TypeError):
        transformer([("x", "shout")])


def test_generate_numeric_report_card():
    card = ReportCard(grade=2.1, student_name="Tom Wriggle", student_age=12)
    assert card.print() == "Tom Wriggle (12) - achieved a grade of 2.1"


def test_generate_alphabetic_report_card():
    card = ReportCard(grade="A+", student_name="Gary Plotter", student_age=11)
    assert card.print() == "Gary Plotter (11) - achieved a grade of A+"