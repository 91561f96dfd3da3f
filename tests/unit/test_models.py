import pytest

from discourse_api.exceptions import ApplicationStatusError
from discourse_api.models import APIResult, FileUpload, FormFields, NestedGroup


class TestAPIResult:
    def test_success_range(self):
        assert APIResult(200, {}).is_success
        assert APIResult(204, "").is_success
        assert not APIResult(302, "").is_success
        assert not APIResult(422, {}).is_success

    def test_structured_detection(self):
        assert APIResult(200, {"a": 1}).is_structured
        assert APIResult(200, [1]).is_structured
        assert not APIResult(200, "OK").is_structured

    def test_get_on_object_payload(self):
        result = APIResult(200, {"user": {"id": 3}})
        assert result.get("user") == {"id": 3}
        assert result.get("missing", "x") == "x"

    def test_get_on_text_payload(self):
        assert APIResult(200, "OK").get("user") is None

    def test_raise_for_status_passes_success(self):
        result = APIResult(200, {"id": 1})
        assert result.raise_for_status() is result

    def test_raise_for_status_uses_errors_list(self):
        result = APIResult(422, {"errors": ["Name has already been taken"]})
        with pytest.raises(ApplicationStatusError) as exc_info:
            result.raise_for_status()

        assert exc_info.value.status_code == 422
        assert "Name has already been taken" in str(exc_info.value)
        assert exc_info.value.payload == result.payload

    def test_raise_for_status_uses_error_field(self):
        with pytest.raises(ApplicationStatusError, match="not found"):
            APIResult(404, {"error": "not found"}).raise_for_status()

    def test_raise_for_status_with_text(self):
        with pytest.raises(ApplicationStatusError, match="HTTP 500: boom"):
            APIResult(500, "boom").raise_for_status()


class TestParamVariants:
    def test_variants_are_frozen(self):
        params = FormFields({"a": 1})
        with pytest.raises(AttributeError):
            params.fields = {}

    def test_defaults(self):
        assert FormFields().fields == {}
        assert NestedGroup().fields == {}
        assert FileUpload("a.png", "a.png", "image/png").extra_fields == {}
