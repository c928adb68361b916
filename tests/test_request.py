"""Request builder: URL shape, encoding and configuration gates."""

import pytest

from src.mspd.errors import ConfigurationError
from src.mspd.request import (BASE_URL, DEFAULT_FIELDS, MSPD_TABLE_1_ENDPOINT,
                              RequestOptions, ResponseFormat, build_query_url)


class TestQueryUrl:
    """URL structure"""

    def test_default_url(self):
        url = build_query_url()
        assert url.startswith(BASE_URL + MSPD_TABLE_1_ENDPOINT + "?")
        assert "sort=-record_date" in url
        assert "format=json" in url
        assert "page%5Bnumber%5D=1" in url
        assert "page%5Bsize%5D=10000" in url
        assert "fields=" + ",".join(DEFAULT_FIELDS) in url

    @pytest.mark.parametrize("options", [
        RequestOptions(),
        RequestOptions(page_number=3, page_size=100),
        RequestOptions(sort_field="record_date", response_format=ResponseFormat.CSV),
        RequestOptions(response_format="xml", fields=("record_date", "total_mil_amt")),
    ])
    def test_one_question_mark_and_ampersand_joins(self, options):
        url = build_query_url(options=options)
        assert url.count("?") == 1
        query = url.split("?", 1)[1]
        assert "&&" not in query
        assert not query.startswith("&") and not query.endswith("&")
        assert len(query.split("&")) == 5
        assert "[" not in url and "]" not in url

    def test_parameter_order(self):
        url = build_query_url(options=RequestOptions(page_size=5, fields=("record_date",)))
        assert url.split("?", 1)[1] == (
            "sort=-record_date&format=json&page%5Bnumber%5D=1&page%5Bsize%5D=5&fields=record_date"
        )

    def test_endpoint_slashes_joined_once(self):
        url = build_query_url(base_url="https://example.test/api/", endpoint="/v1/table")
        assert url.startswith("https://example.test/api/v1/table?")

    def test_without_field_filtering(self):
        url = build_query_url(options=RequestOptions(fields=()), filter_fields=False)
        assert "fields=" not in url
        assert len(url.split("?", 1)[1].split("&")) == 4

    def test_duplicate_fields_dropped_in_order(self):
        url = build_query_url(options=RequestOptions(fields=("total_mil_amt", "record_date", "total_mil_amt")))
        assert url.endswith("fields=total_mil_amt,record_date")

    def test_with_page(self):
        options = RequestOptions(page_size=50).with_page(4)
        assert options.page_number == 4
        assert options.page_size == 50


@pytest.mark.fail_loud
class TestConfigurationErrors:
    """Bad parameters raise ConfigurationError"""

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_non_positive_page_size(self, page_size):
        with pytest.raises(ConfigurationError):
            build_query_url(options=RequestOptions(page_size=page_size))

    def test_non_positive_page_number(self):
        with pytest.raises(ConfigurationError):
            build_query_url(options=RequestOptions(page_number=0))

    def test_empty_fields_when_filtering(self):
        with pytest.raises(ConfigurationError):
            build_query_url(options=RequestOptions(fields=()))

    def test_bare_string_fields(self):
        with pytest.raises(ConfigurationError, match="not a string"):
            build_query_url(options=RequestOptions(fields="record_date"))

    def test_blank_fields_when_filtering(self):
        with pytest.raises(ConfigurationError):
            build_query_url(options=RequestOptions(fields=("", "  ")))

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError):
            build_query_url(options=RequestOptions(response_format="yaml"))

    def test_base_url_with_query_rejected(self):
        with pytest.raises(ConfigurationError):
            build_query_url(base_url="https://example.test/api?x=1")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_query_url(options=RequestOptions(page_size=0))
