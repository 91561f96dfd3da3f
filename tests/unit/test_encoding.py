"""
Tests for request encoding and response parsing helpers.
"""

import httpx
import pytest

from discourse_api.core.encoding import (
    build_auth_headers,
    build_query_string,
    build_url,
    build_write_body,
    describe_params,
    encode_form_fields,
    encode_nested_group,
    flatten_params,
    format_value,
    normalize_params,
    parse_response_body,
    parse_retry_after,
)
from discourse_api.exceptions import InvalidParamsError
from discourse_api.models import FileUpload, FormFields, NestedGroup

SHOW_EMAILS = {"show_emails": "true"}


class TestFormatValue:
    def test_booleans_are_lowercase_words(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_none_is_empty(self):
        assert format_value(None) == ""

    def test_numbers_are_stringified(self):
        assert format_value(29) == "29"

    def test_nested_values_are_rejected(self):
        with pytest.raises(InvalidParamsError):
            format_value({"a": 1})


class TestFormFields:
    def test_values_are_urlencoded_in_insertion_order(self):
        body = encode_form_fields(
            {"name": "a new category", "color": "cc2222", "text_color": "000000"}
        )
        assert body == "name=a+new+category&color=cc2222&text_color=000000"

    def test_keys_are_written_verbatim(self):
        body = encode_form_fields({"post[raw]": "x & y", "permissions[staff]": 1})
        assert body == "post[raw]=x+%26+y&permissions[staff]=1"

    def test_empty_fields_give_empty_body(self):
        assert encode_form_fields({}) == ""

    def test_encoding_is_deterministic(self):
        fields = {"b": "2", "a": "1 2", "c": "é"}
        assert encode_form_fields(fields) == encode_form_fields(dict(fields))


class TestNestedGroup:
    def test_group_is_flattened_to_bracketed_keys(self):
        body = encode_nested_group({"group": {"name": "foo", "usernames": "a,b"}})
        assert body == "group[name]=foo&group[usernames]=a,b"

    def test_values_are_still_encoded(self):
        body = encode_nested_group({"group": {"title": "Core team", "visible": True}})
        assert body == "group[title]=Core+team&group[visible]=true"

    def test_lists_are_indexed(self):
        assert flatten_params({"tags": ["a", "b"]}) == [("tags[0]", "a"), ("tags[1]", "b")]

    def test_none_values_are_skipped(self):
        assert flatten_params({"a": None, "b": "1"}) == [("b", "1")]


class TestQueryString:
    def test_show_emails_is_appended(self):
        query = build_query_string(FormFields({"filter": "a@b.com"}), SHOW_EMAILS)
        assert query == "filter=a%40b.com&show_emails=true"

    def test_show_emails_without_params(self):
        assert build_query_string(FormFields(), SHOW_EMAILS) == "show_emails=true"

    def test_caller_cannot_disable_forced_param(self):
        query = build_query_string(
            FormFields({"show_emails": "false", "page": 2}), SHOW_EMAILS
        )
        assert query == "show_emails=true&page=2"

    def test_file_upload_rejected(self, upload_file):
        with pytest.raises(InvalidParamsError):
            build_query_string(FileUpload(upload_file, "logo.png", "image/png"))


class TestBuildUrl:
    def test_plain_url(self):
        assert build_url("https", "forum.example.com", "/t/1.json") == (
            "https://forum.example.com/t/1.json"
        )

    def test_query_appended(self):
        url = build_url("http", "localhost:3000", "/groups.json", "show_emails=true")
        assert url == "http://localhost:3000/groups.json?show_emails=true"

    def test_existing_query_is_extended(self):
        url = build_url("https", "f.io", "/list.json?filter=x", "show_emails=true")
        assert url == "https://f.io/list.json?filter=x&show_emails=true"


class TestHeaders:
    def test_auth_headers(self):
        headers = build_auth_headers("secret", "alice")
        assert headers["Api-Key"] == "secret"
        assert headers["Api-Username"] == "alice"
        assert headers["Accept"] == "application/json"


class TestWriteBody:
    def test_form_body_and_header(self):
        body = build_write_body(FormFields({"usernames": "bob"}))
        assert body["content"] == b"usernames=bob"
        assert body["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_legacy_header(self):
        body = build_write_body(FormFields({"a": "1"}), legacy_content_type=True)
        assert body["headers"]["Content-Type"] == "multipart/form-data"
        assert body["content"] == b"a=1"

    def test_nested_group_body(self):
        body = build_write_body(NestedGroup({"group": {"name": "foo"}}))
        assert body["content"] == b"group[name]=foo"

    def test_upload_builds_multipart(self, upload_file):
        kwargs = build_write_body(
            FileUpload(upload_file, "logo.png", "image/png", {"synchronous": True})
        )
        assert kwargs["headers"] == {}

        request = httpx.Request(
            "POST",
            "https://forum.example.com/uploads.json",
            files=kwargs["files"],
            data=kwargs["data"],
        )
        content = request.read()

        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="file"; filename="logo.png"' in content
        assert b"Content-Type: image/png" in content
        assert b"\x89PNG fake image bytes" in content
        assert b'name="type"\r\n\r\nupload\r\n' in content
        assert b'name="synchronous"\r\n\r\ntrue\r\n' in content

    def test_missing_upload_file(self, tmp_path):
        with pytest.raises(InvalidParamsError, match="not found"):
            build_write_body(FileUpload(tmp_path / "nope.png", "nope.png", "image/png"))


class TestNormalizeParams:
    def test_none_and_empty(self):
        assert normalize_params(None) == FormFields()
        assert normalize_params([]) == FormFields()
        assert normalize_params({}) == FormFields()

    def test_variants_pass_through(self):
        params = NestedGroup({"group": {}})
        assert normalize_params(params) is params

    def test_single_element_list(self):
        assert normalize_params([{"a": "1"}]) == FormFields({"a": "1"})

    def test_group_mapping(self):
        raw = {"group": {"name": "foo"}}
        assert normalize_params(raw) == NestedGroup(raw)

    def test_group_that_is_not_a_mapping_is_a_field(self):
        assert normalize_params({"group": "foo"}) == FormFields({"group": "foo"})

    def test_upload_marker(self, upload_file):
        params = normalize_params(
            {
                "file": (str(upload_file), "logo.png", "image/png"),
                "type": "upload",
                "uploadFile": True,
            }
        )
        assert params == FileUpload(str(upload_file), "logo.png", "image/png", {})

    def test_upload_marker_without_file(self):
        with pytest.raises(InvalidParamsError):
            normalize_params({"uploadFile": True})

    def test_unsupported_shape(self):
        with pytest.raises(InvalidParamsError):
            normalize_params(["not", "a", "mapping"])


class TestParseResponse:
    def test_json_object(self):
        assert parse_response_body('{"id": 5, "name": "general"}') == {
            "id": 5,
            "name": "general",
        }

    def test_json_array(self):
        assert parse_response_body("[1, 2]") == [1, 2]

    def test_plain_text_is_returned_verbatim(self):
        assert parse_response_body("OK") == "OK"

    def test_empty_body(self):
        assert parse_response_body("") == ""

    def test_html_error_page(self):
        page = "<html><body>Bad Gateway</body></html>"
        assert parse_response_body(page) == page

    @pytest.mark.parametrize(
        "value,expected", [("12", 12.0), ("", None), (None, None), ("soon", None)]
    )
    def test_retry_after(self, value, expected):
        assert parse_retry_after(value) == expected


def test_describe_params_is_json():
    assert describe_params(FormFields({"a": 1})) == '{"a": 1}'
