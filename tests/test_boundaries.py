"""Tests for Result-returning boundary helpers."""
from core.errors import Err, ErrorCode, Ok
from core.validation import BoundaryValidator, parse_batch, parse_ingress

RULES = {"name": "required|varchar", "color": "hexcolor"}


class TestParseIngress:
    def test_valid_payload_is_ok(self, validator):
        result = parse_ingress({"name": " Stage ", "color": ""}, RULES, validator=validator)
        assert result == Ok({"name": "Stage", "color": None})

    def test_invalid_payload_is_err_with_report(self, validator):
        result = parse_ingress({"name": "", "color": "red"}, RULES, validator=validator)
        assert result.is_err()
        error = result.unwrap_err()
        assert error.code is ErrorCode.E2000_VALIDATION_GENERIC
        assert error.message == "Invalid Data Provided"
        assert error.context.origin == "ingress"
        assert error.metadata["error_count"] == 2
        assert error.metadata["report"] == {
            "error_message": "Invalid Data Provided",
            "errors": {"name": "This field is required.", "color": "Invalid hexadecimal color value"},
        }
        assert [e["constraint"] for e in error.metadata["errors"]] == ["required", "hexcolor"]

    def test_error_serializes(self, validator):
        error = parse_ingress({"name": ""}, RULES, validator=validator).unwrap_err()
        body = error.to_dict()["error"]
        assert body["code"] == "E2000_VALIDATION_GENERIC"
        assert body["category"] == "validation"
        assert body["metadata"]["report"]["errors"] == {"name": "This field is required."}

    def test_check_missing(self, validator):
        assert parse_ingress({}, RULES, validator=validator).is_ok()
        assert parse_ingress({}, RULES, validator=validator, check_missing=True).is_err()

    def test_pattern_matching(self, validator):
        match parse_ingress({"name": "Stage"}, RULES, validator=validator):
            case Ok(data):
                assert data == {"name": "Stage"}
            case Err(error):
                raise AssertionError(error)


class TestParseBatch:
    def test_all_valid(self, validator):
        result = parse_batch([{"name": "A"}, {"name": "B"}], RULES, validator=validator)
        assert result == Ok([{"name": "A"}, {"name": "B"}])

    def test_failures_carry_index(self, validator):
        result = parse_batch([{"name": "A"}, {"name": ""}, {"name": "C", "color": "x"}], RULES, validator=validator)
        assert result.is_err()
        errors = result.unwrap_err()
        assert [idx for idx, _ in errors] == [1, 2]
        assert errors[0][1].metadata["batch_index"] == 1
        assert errors[1][1].metadata["report"]["errors"] == {"color": "Invalid hexadecimal color value"}

    def test_max_errors_stops_early(self, validator):
        items = [{"name": ""} for _ in range(5)]
        errors = parse_batch(items, RULES, validator=validator, max_errors=2).unwrap_err()
        assert [idx for idx, _ in errors] == [0, 1]

    def test_empty_batch(self, validator):
        assert parse_batch([], RULES, validator=validator) == Ok([])


class TestBoundaryValidator:
    def test_copies_rules(self, validator):
        rules = dict(RULES)
        boundary = BoundaryValidator(rules, validator)
        rules["name"] = "integer"
        assert boundary.parse_ingress({"name": "Stage"}).is_ok()

    def test_each_call_is_a_fresh_run(self, validator):
        boundary = BoundaryValidator(RULES, validator)
        assert boundary.parse_ingress({"name": ""}).is_err()
        assert boundary.parse_ingress({"name": "Stage"}) == Ok({"name": "Stage"})
