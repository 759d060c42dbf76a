from __future__ import annotations

import pytest

from epitrack.dates import date_label, day_difference, day_index


class TestDayIndex:
    @pytest.mark.parametrize(
        "date, expected",
        [
            ("01-22", 1),
            ("01-31", 10),
            ("02-01", 11),
            ("02-29", 39),
            ("03-01", 40),
            ("03-29-2020", 68),
        ],
    )
    def test_offset_table(self, date: str, expected: int) -> None:
        assert day_index(date) == expected

    def test_months_outside_window_are_zero(self) -> None:
        assert day_index("04-01-2020") == 0
        assert day_index("12-31") == 0

    def test_garbage_is_zero(self) -> None:
        assert day_index("") == 0
        assert day_index("march") == 0
        assert day_index("03-xx") == 0

    def test_window_is_contiguous(self) -> None:
        assert day_index("02-01") - day_index("01-31") == 1
        assert day_index("03-01-2020") - day_index("02-29-2020") == 1


class TestDayDifference:
    def test_forward(self) -> None:
        assert day_difference("02-01", "01-22") == 10

    def test_backward_is_negative(self) -> None:
        assert day_difference("01-22", "02-01") == -10

    def test_same_day(self) -> None:
        assert day_difference("03-05-2020", "03-05-2020") == 0


class TestDateLabel:
    def test_plain_filename(self) -> None:
        assert date_label("01-22-2020.csv") == "01-22-2020"

    def test_path_with_digits_in_folder(self) -> None:
        assert date_label("data2020/daily_reports/03-01-2020.csv") == "03-01-2020"

    def test_prefix_before_first_digit_is_dropped(self) -> None:
        assert date_label("report_02-14-2020.csv") == "02-14-2020"

    def test_no_digits_raises(self) -> None:
        with pytest.raises(ValueError):
            date_label("README.csv")
