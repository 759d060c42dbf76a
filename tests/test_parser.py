from __future__ import annotations

from epitrack.parser import ParsedRow, parse_row, split_fields


class TestSplitFields:
    def test_plain_row(self) -> None:
        assert split_fields("Hubei,China,1/22/2020 17:00,444,17,28") == [
            "Hubei", "China", "1/22/2020 17:00", "444", "17", "28",
        ]

    def test_quoted_compound_stays_one_field(self) -> None:
        fields = split_fields('"Chicago, IL",US,2020-01-24T17:00:00,1,0,0')
        assert fields == ["Chicago IL", "US", "2020-01-24T17:00:00", "1", "0", "0"]

    def test_quoted_field_in_the_middle(self) -> None:
        assert split_fields('a,"b, c",d') == ["a", "b c", "d"]

    def test_empty_fields_are_kept(self) -> None:
        assert split_fields(",Japan,1/22/2020,2,,") == ["", "Japan", "1/22/2020", "2", "", ""]

    def test_trailing_newline_is_ignored(self) -> None:
        assert split_fields("a,b\r\n") == ["a", "b"]

    def test_stray_quote_does_not_raise(self) -> None:
        assert split_fields('ab"c,d') == ["abc", "d"]

    def test_text_after_quoted_span_keeps_columns(self) -> None:
        assert split_fields('"a,b"c,US,x,1,2,3') == ["abc", "US", "x", "1", "2", "3"]

    def test_unclosed_quote(self) -> None:
        assert split_fields('"abc,d') == ["abc", "d"]


class TestParseRow:
    def test_normal_row(self) -> None:
        row = parse_row("Hubei,China,1/22/2020 17:00,444,17,28")
        assert row == ParsedRow(region="China", confirmed=444, deaths=17, recovered=28)

    def test_missing_numbers_default_to_zero(self) -> None:
        row = parse_row(",Japan,1/22/2020 17:00,2,,")
        assert (row.confirmed, row.deaths, row.recovered) == (2, 0, 0)

    def test_short_row_is_padded(self) -> None:
        row = parse_row(",Japan,1/22/2020 17:00,2")
        assert row == ParsedRow(region="Japan", confirmed=2, deaths=0, recovered=0)

    def test_malformed_numbers_become_zero(self) -> None:
        row = parse_row(",Italy,3/1/2020,abc,n/a,-4")
        assert (row.confirmed, row.deaths, row.recovered) == (0, 0, 0)

    def test_whole_number_with_zero_decimals(self) -> None:
        row = parse_row(",Italy,3/1/2020,12.0,1.00,0")
        assert (row.confirmed, row.deaths) == (12, 1)

    def test_non_integer_counts_become_zero(self) -> None:
        row = parse_row(",Italy,3/1/2020,1e3,12.5,inf")
        assert (row.confirmed, row.deaths, row.recovered) == (0, 0, 0)

    def test_shifted_columns_after_quoted_span(self) -> None:
        row = parse_row('"King County, WA"x,US,2020-03-01,14,6,1')
        assert row == ParsedRow(region="US", confirmed=14, deaths=6, recovered=1)

    def test_extra_columns_are_ignored(self) -> None:
        row = parse_row(",Italy,3/1/2020,10,1,2,41.87,12.56")
        assert row == ParsedRow(region="Italy", confirmed=10, deaths=1, recovered=2)

    def test_quoted_sub_region_does_not_shift_columns(self) -> None:
        row = parse_row('"King County, WA",US,2020-03-01T19:43:03,14,6,1')
        assert row == ParsedRow(region="US", confirmed=14, deaths=6, recovered=1)

    def test_aliases(self) -> None:
        assert parse_row("Hubei,Mainland China,x,1,0,0").region == "China"
        assert parse_row(",Republic of Korea,x,1,0,0").region == "South Korea"
        assert parse_row(",China,x,1,0,0").region == "China"

    def test_blank_line(self) -> None:
        assert parse_row("") == ParsedRow(region="", confirmed=0, deaths=0, recovered=0)
